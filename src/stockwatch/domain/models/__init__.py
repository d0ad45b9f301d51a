"""Domain models package."""

from stockwatch.domain.models.enums import (
    Market,
    RebalanceMode,
    RebalanceSide,
    Trend,
    AlertCondition,
)
from stockwatch.domain.models.portfolio import PortfolioGroup, Holding
from stockwatch.domain.models.watchlist import WatchlistItem, Alert
from stockwatch.domain.models.market_data import PriceBar, Quote

__all__ = [
    "Market",
    "RebalanceMode",
    "RebalanceSide",
    "Trend",
    "AlertCondition",
    "PortfolioGroup",
    "Holding",
    "WatchlistItem",
    "Alert",
    "PriceBar",
    "Quote",
]
