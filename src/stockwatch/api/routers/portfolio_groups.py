"""Portfolio group endpoints."""

from fastapi import APIRouter, Depends

from stockwatch.api.deps import get_portfolio_service
from stockwatch.api.schemas import GroupCreate, GroupResponse
from stockwatch.services import PortfolioService

router = APIRouter(prefix="/api/portfolio-groups", tags=["portfolio-groups"])


@router.get("", response_model=list[GroupResponse])
def list_groups(
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[GroupResponse]:
    return [GroupResponse.model_validate(g) for g in service.list_groups()]


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    data: GroupCreate,
    service: PortfolioService = Depends(get_portfolio_service),
) -> GroupResponse:
    return GroupResponse.model_validate(service.create_group(data.name, data.description))


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: int,
    data: GroupCreate,
    service: PortfolioService = Depends(get_portfolio_service),
) -> GroupResponse:
    return GroupResponse.model_validate(
        service.update_group(group_id, data.name, data.description)
    )


@router.delete("/{group_id}", status_code=204)
def delete_group(
    group_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    """Delete a group and its holdings; the last group cannot be deleted."""
    service.delete_group(group_id)
