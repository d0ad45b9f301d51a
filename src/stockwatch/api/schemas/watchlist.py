"""Pydantic schemas for watchlist and alert endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockwatch.domain.models.enums import AlertCondition, Market


class WatchlistCreate(BaseModel):
    """Request schema for adding a symbol to the watchlist."""

    symbol: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)
    market: Market


class WatchlistUpdate(BaseModel):
    """Request schema for renaming an entry or moving it to another market."""

    name: Optional[str] = Field(default=None, max_length=255)
    market: Optional[Market] = None


class WatchlistItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    symbol: str
    name: str
    market: Market
    created_at: Optional[datetime] = None


class AlertCreate(BaseModel):
    """Request schema for creating an alert."""

    symbol: str = Field(..., min_length=1, max_length=20)
    condition_type: AlertCondition
    threshold: Optional[float] = Field(
        default=None,
        description="Price or volume ratio; required for price and volume conditions",
    )


class AlertUpdate(BaseModel):
    is_active: bool


class AlertResponse(BaseModel):
    """Response schema for a single alert."""

    model_config = {"from_attributes": True}

    id: int
    symbol: str
    condition_type: AlertCondition
    threshold: float
    is_active: bool
    created_at: Optional[datetime] = None
    triggered_at: Optional[datetime] = None
