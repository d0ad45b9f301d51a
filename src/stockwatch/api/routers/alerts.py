"""Alert endpoints."""

from fastapi import APIRouter, Depends

from stockwatch.api.deps import get_alert_service
from stockwatch.api.schemas import AlertCreate, AlertResponse, AlertUpdate
from stockwatch.services import AlertService

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertResponse])
def list_alerts(
    service: AlertService = Depends(get_alert_service),
) -> list[AlertResponse]:
    return [AlertResponse.model_validate(a) for a in service.list_alerts()]


@router.post("", response_model=AlertResponse, status_code=201)
def create_alert(
    data: AlertCreate,
    service: AlertService = Depends(get_alert_service),
) -> AlertResponse:
    alert = service.create_alert(data.symbol, data.condition_type, data.threshold)
    return AlertResponse.model_validate(alert)


# Registered before /{alert_id} routes
@router.post("/check", response_model=list[AlertResponse])
def check_alerts(
    service: AlertService = Depends(get_alert_service),
) -> list[AlertResponse]:
    """Evaluate all active alerts and return the ones that fired."""
    return [AlertResponse.model_validate(a) for a in service.check_alerts()]


@router.patch("/{alert_id}", response_model=AlertResponse)
def update_alert(
    alert_id: int,
    data: AlertUpdate,
    service: AlertService = Depends(get_alert_service),
) -> AlertResponse:
    """Enable or disable an alert."""
    return AlertResponse.model_validate(service.set_active(alert_id, data.is_active))


@router.delete("/{alert_id}", status_code=204)
def delete_alert(
    alert_id: int,
    service: AlertService = Depends(get_alert_service),
) -> None:
    service.delete_alert(alert_id)
