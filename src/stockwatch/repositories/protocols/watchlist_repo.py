"""Watchlist and alert repository protocols."""

from datetime import datetime
from typing import Protocol, Optional

from stockwatch.domain.models import Alert, WatchlistItem


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def create(self, item: WatchlistItem) -> WatchlistItem:
        ...

    def get_by_symbol(self, symbol: str) -> Optional[WatchlistItem]:
        ...

    def list_all(self) -> list[WatchlistItem]:
        """List entries, newest first."""
        ...

    def update(self, item: WatchlistItem) -> WatchlistItem:
        ...

    def delete(self, symbol: str) -> None:
        ...


class AlertRepository(Protocol):
    """Interface for alert data access."""

    def create(self, alert: Alert) -> Alert:
        ...

    def get_by_id(self, alert_id: int) -> Optional[Alert]:
        ...

    def list_all(self, active_only: bool = False) -> list[Alert]:
        ...

    def set_active(self, alert_id: int, is_active: bool) -> Alert:
        ...

    def mark_triggered(self, alert_id: int, triggered_at: datetime) -> Alert:
        """Stamp the time an alert condition last held."""
        ...

    def delete(self, alert_id: int) -> None:
        ...
