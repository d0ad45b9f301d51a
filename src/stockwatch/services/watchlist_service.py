"""Watchlist service."""

from typing import Optional

from stockwatch.core.exceptions import ConflictError, NotFoundError, ValidationError
from stockwatch.domain.models import Market, WatchlistItem
from stockwatch.repositories.protocols import WatchlistRepository


def _parse_market(value) -> Market:
    try:
        return Market(value)
    except ValueError:
        raise ValidationError("Market must be TW or US") from None


class WatchlistService:
    """Service for the list of symbols the user follows."""

    def __init__(self, watchlist_repo: WatchlistRepository):
        self._repo = watchlist_repo

    def list_items(self) -> list[WatchlistItem]:
        return self._repo.list_all()

    def get_item(self, symbol: str) -> WatchlistItem:
        item = self._repo.get_by_symbol(symbol.strip().upper())
        if not item:
            raise NotFoundError("Watchlist item", symbol)
        return item

    def add_item(self, symbol: str, name: str, market) -> WatchlistItem:
        """Add a symbol; adding the same symbol twice is a conflict."""
        symbol = (symbol or "").strip().upper()
        name = (name or "").strip()
        if not symbol or not name:
            raise ValidationError("Symbol and name are required")
        market = _parse_market(market)
        if self._repo.get_by_symbol(symbol):
            raise ConflictError(f"{symbol} is already on the watchlist")
        return self._repo.create(
            WatchlistItem(id=None, symbol=symbol, name=name, market=market)
        )

    def update_item(
        self,
        symbol: str,
        name: Optional[str] = None,
        market=None,
    ) -> WatchlistItem:
        """Rename an entry and/or move it to another market."""
        name = (name or "").strip()
        if not name and not market:
            raise ValidationError("Provide at least a name or a market")
        item = self.get_item(symbol)
        if market:
            item.market = _parse_market(market)
        if name:
            item.name = name
        return self._repo.update(item)

    def remove_item(self, symbol: str) -> None:
        item = self.get_item(symbol)
        self._repo.delete(item.symbol)
