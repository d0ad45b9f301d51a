"""Unit tests for WatchlistService."""

import pytest

from stockwatch.core.exceptions import ConflictError, NotFoundError, ValidationError
from stockwatch.domain.models import Market


class TestWatchlistService:

    def test_add_and_list_newest_first(self, watchlist_service):
        watchlist_service.add_item("AAPL", "Apple", "US")
        watchlist_service.add_item("2330", "TSMC", Market.TW)

        items = watchlist_service.list_items()

        assert [i.symbol for i in items] == ["2330", "AAPL"]
        assert items[0].market == Market.TW

    def test_duplicate_symbol_conflicts(self, watchlist_service):
        """
        GIVEN AAPL already on the watchlist
        WHEN adding aapl again
        THEN ConflictError is raised
        """
        watchlist_service.add_item("AAPL", "Apple", "US")

        with pytest.raises(ConflictError):
            watchlist_service.add_item("aapl", "Apple again", "US")

    def test_invalid_market_rejected(self, watchlist_service):
        with pytest.raises(ValidationError):
            watchlist_service.add_item("7203", "Toyota", "JP")

    def test_update_requires_name_or_market(self, watchlist_service):
        watchlist_service.add_item("AAPL", "Apple", "US")

        with pytest.raises(ValidationError):
            watchlist_service.update_item("AAPL")

    def test_blank_name_is_not_a_rename(self, watchlist_service):
        """
        GIVEN an entry named Apple
        WHEN updating with a whitespace-only name
        THEN the update is rejected and the name is unchanged
        """
        watchlist_service.add_item("AAPL", "Apple", "US")

        with pytest.raises(ValidationError):
            watchlist_service.update_item("AAPL", name="   ")

        assert watchlist_service.get_item("AAPL").name == "Apple"

    def test_blank_name_with_market_only_moves_market(self, watchlist_service):
        watchlist_service.add_item("0050", "Yuanta 50", "US")

        item = watchlist_service.update_item("0050", name="  ", market="TW")

        assert item.name == "Yuanta 50"
        assert item.market == Market.TW

    def test_update_name_only_keeps_market(self, watchlist_service):
        watchlist_service.add_item("AAPL", "Apple", "US")

        item = watchlist_service.update_item("AAPL", name="Apple Inc.")

        assert item.name == "Apple Inc."
        assert item.market == Market.US

    def test_update_market(self, watchlist_service):
        watchlist_service.add_item("0050", "Yuanta 50", "US")

        item = watchlist_service.update_item("0050", market="TW")

        assert item.market == Market.TW
        assert item.name == "Yuanta 50"

    def test_update_missing(self, watchlist_service):
        with pytest.raises(NotFoundError):
            watchlist_service.update_item("NOPE", name="x")

    def test_remove(self, watchlist_service):
        watchlist_service.add_item("AAPL", "Apple", "US")

        watchlist_service.remove_item("AAPL")

        assert watchlist_service.list_items() == []
        with pytest.raises(NotFoundError):
            watchlist_service.remove_item("AAPL")
