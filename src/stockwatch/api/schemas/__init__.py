"""Pydantic schemas for API request/response."""

from stockwatch.api.schemas.watchlist import (
    WatchlistCreate,
    WatchlistUpdate,
    WatchlistItemResponse,
    AlertCreate,
    AlertUpdate,
    AlertResponse,
)
from stockwatch.api.schemas.portfolio import (
    GroupCreate,
    GroupResponse,
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    HoldingDetailResponse,
    PortfolioDetailsResponse,
    RebalanceActionResponse,
    RebalanceResponse,
)
from stockwatch.api.schemas.quote import (
    PriceBarResponse,
    QuoteResponse,
    ExchangeRateResponse,
    TechnicalsResponse,
    SummaryResponse,
)

__all__ = [
    "WatchlistCreate",
    "WatchlistUpdate",
    "WatchlistItemResponse",
    "AlertCreate",
    "AlertUpdate",
    "AlertResponse",
    "GroupCreate",
    "GroupResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "HoldingDetailResponse",
    "PortfolioDetailsResponse",
    "RebalanceActionResponse",
    "RebalanceResponse",
    "PriceBarResponse",
    "QuoteResponse",
    "ExchangeRateResponse",
    "TechnicalsResponse",
    "SummaryResponse",
]
