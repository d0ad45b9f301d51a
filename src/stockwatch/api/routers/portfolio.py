"""Portfolio holding endpoints: CRUD, valuation and rebalancing."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from stockwatch.api.deps import get_portfolio_service
from stockwatch.api.schemas import (
    HoldingCreateRequest,
    HoldingDetailResponse,
    HoldingResponse,
    HoldingUpdateRequest,
    PortfolioDetailsResponse,
    RebalanceResponse,
)
from stockwatch.domain.models import RebalanceMode
from stockwatch.repositories.sqlalchemy.database import DEFAULT_GROUP_ID
from stockwatch.services import HoldingCreate, HoldingUpdate, PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("", response_model=list[HoldingResponse])
def list_holdings(
    group_id: Optional[int] = Query(None, description="Restrict to one group"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> list[HoldingResponse]:
    return [HoldingResponse.model_validate(h) for h in service.list_holdings(group_id)]


@router.post("", response_model=HoldingResponse, status_code=201)
def add_holding(
    data: HoldingCreateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    holding = service.add_holding(
        HoldingCreate(
            group_id=data.group_id,
            symbol=data.symbol,
            name=data.name,
            shares=data.shares,
            cost_price=data.cost_price,
            target_allocation=data.target_allocation,
        )
    )
    return HoldingResponse.model_validate(holding)


@router.get("/details", response_model=PortfolioDetailsResponse)
def get_details(
    group_id: int = Query(DEFAULT_GROUP_ID),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioDetailsResponse:
    """Holdings valued at current prices, with allocation percentages."""
    valuation = service.get_details(group_id)
    return PortfolioDetailsResponse(
        holdings=[HoldingDetailResponse.from_detail(d) for d in valuation.details],
        total_market_value=valuation.total_market_value,
    )


@router.get("/rebalance", response_model=RebalanceResponse)
def get_rebalance(
    group_id: int = Query(DEFAULT_GROUP_ID),
    mode: RebalanceMode = Query(RebalanceMode.ALL),
    service: PortfolioService = Depends(get_portfolio_service),
) -> RebalanceResponse:
    """Buy/sell actions that move each holding toward its target allocation."""
    return RebalanceResponse.model_validate(service.get_rebalance(group_id, mode))


@router.put("/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: int,
    data: HoldingUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    holding = service.update_holding(
        holding_id,
        HoldingUpdate(
            shares=data.shares,
            cost_price=data.cost_price,
            target_allocation=data.target_allocation,
        ),
    )
    return HoldingResponse.model_validate(holding)


@router.delete("/{holding_id}", status_code=204)
def delete_holding(
    holding_id: int,
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    service.delete_holding(holding_id)
