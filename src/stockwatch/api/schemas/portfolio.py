"""Pydantic schemas for portfolio group and holding endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockwatch.domain.models.enums import RebalanceMode, RebalanceSide
from stockwatch.domain.views import HoldingDetail


class GroupCreate(BaseModel):
    """Request schema for creating or renaming a portfolio group."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=1000)


class GroupResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    description: str = ""
    created_at: Optional[datetime] = None


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding. TW shares are in lots."""

    group_id: int = Field(default=1, description="Owning portfolio group")
    symbol: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)
    shares: float = Field(..., ge=0)
    cost_price: float = Field(..., ge=0)
    target_allocation: float = Field(default=0.0, ge=0, le=100)


class HoldingUpdateRequest(BaseModel):
    """Request schema for replacing a holding's position fields."""

    shares: float = Field(..., ge=0)
    cost_price: float = Field(..., ge=0)
    target_allocation: float = Field(default=0.0, ge=0, le=100)


class HoldingResponse(BaseModel):
    """Response schema for a stored holding."""

    model_config = {"from_attributes": True}

    id: int
    group_id: int
    symbol: str
    name: str
    shares: float
    cost_price: float
    target_allocation: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HoldingDetailResponse(HoldingResponse):
    """A holding with its live valuation."""

    current_price: float
    market_value: float
    profit_loss: float
    profit_loss_percent: float
    current_allocation: float
    allocation_diff: float

    @classmethod
    def from_detail(cls, detail: HoldingDetail) -> "HoldingDetailResponse":
        h = detail.holding
        return cls(
            id=h.id,
            group_id=h.group_id,
            symbol=h.symbol,
            name=h.name,
            shares=h.shares,
            cost_price=h.cost_price,
            target_allocation=h.target_allocation,
            created_at=h.created_at,
            updated_at=h.updated_at,
            current_price=detail.current_price,
            market_value=detail.market_value,
            profit_loss=detail.profit_loss,
            profit_loss_percent=detail.profit_loss_percent,
            current_allocation=detail.current_allocation,
            allocation_diff=detail.allocation_diff,
        )


class PortfolioDetailsResponse(BaseModel):
    holdings: list[HoldingDetailResponse]
    total_market_value: float


class RebalanceActionResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    action: RebalanceSide
    shares: float
    amount: float
    reason: str


class RebalanceResponse(BaseModel):
    """Response schema for a rebalance plan."""

    model_config = {"from_attributes": True}

    actions: list[RebalanceActionResponse]
    total_market_value: float
    mode: RebalanceMode
