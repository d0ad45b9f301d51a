"""Watchlist and alert domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from stockwatch.domain.models.enums import Market, AlertCondition


@dataclass
class WatchlistItem:
    """A symbol the user follows on the dashboard."""

    id: Optional[int]
    symbol: str
    name: str
    market: Market
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.market, str):
            self.market = Market(self.market)


@dataclass
class Alert:
    """A price/volume/technical condition to watch for on a symbol."""

    id: Optional[int]
    symbol: str
    condition_type: AlertCondition
    threshold: float
    is_active: bool = True
    created_at: Optional[datetime] = field(default=None)
    triggered_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.condition_type, str):
            self.condition_type = AlertCondition(self.condition_type)
