"""Repository protocol definitions (interfaces)."""

from stockwatch.repositories.protocols.portfolio_repo import GroupRepository, HoldingRepository
from stockwatch.repositories.protocols.watchlist_repo import WatchlistRepository, AlertRepository

__all__ = [
    "GroupRepository",
    "HoldingRepository",
    "WatchlistRepository",
    "AlertRepository",
]
