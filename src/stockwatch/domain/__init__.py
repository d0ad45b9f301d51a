"""Domain layer - pure business models with no external dependencies."""

from stockwatch.domain.models import (
    Market,
    RebalanceMode,
    RebalanceSide,
    Trend,
    AlertCondition,
    PortfolioGroup,
    Holding,
    WatchlistItem,
    Alert,
    PriceBar,
    Quote,
)
from stockwatch.domain.market import classify_market, unit_size, unit_label

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
    "classify_market",
    "unit_size",
    "unit_label",
]
