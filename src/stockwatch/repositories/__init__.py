"""Repository layer - data access abstractions and implementations."""

from stockwatch.repositories.protocols import (
    GroupRepository,
    HoldingRepository,
    WatchlistRepository,
    AlertRepository,
)

__all__ = [
    "GroupRepository",
    "HoldingRepository",
    "WatchlistRepository",
    "AlertRepository",
]
