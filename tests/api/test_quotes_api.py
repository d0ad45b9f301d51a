"""
API tests for quotes, history and analysis endpoints.

Tests cover:
- Live quotes and market inference
- USD/TWD exchange rate
- History parameters
- Technicals and summary
- Health and root endpoints
"""

import pytest

from stockwatch import __version__
from stockwatch.domain.models import Market
from tests.conftest import make_bars


class TestQuoteAPI:

    def test_get_quote(self, client):
        response = client.get("/api/quotes/AAPL")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["close"] == 185.50
        assert data["previous_close"] == 184.25
        assert data["date"] == "2024-06-14"

    def test_unknown_symbol_is_404(self, client):
        response = client.get("/api/quotes/ZZZZ")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_market_inferred_from_symbol(self, client, market_provider):
        """
        GIVEN an all-digit symbol and no market parameter
        WHEN requesting its quote
        THEN the provider is asked for the TW market
        """
        client.get("/api/quotes/2330")

        assert market_provider.quote_calls[-1] == ("2330", Market.TW)

    def test_explicit_market_wins(self, client, market_provider):
        client.get("/api/quotes/2330", params={"market": "US"})

        assert market_provider.quote_calls[-1] == ("2330", Market.US)

    def test_quotes_are_cached(self, client, market_provider):
        client.get("/api/quotes/MSFT")
        client.get("/api/quotes/msft")

        assert market_provider.quote_calls.count(("MSFT", Market.US)) == 1


class TestExchangeRateAPI:

    def test_exchange_rate(self, client):
        response = client.get("/api/quotes/exchange-rate")

        assert response.status_code == 200
        data = response.json()
        assert data["rate"] == 31.85
        assert data["updated_at"]

    def test_unavailable_rate_is_503(self, client, market_provider):
        del market_provider.quotes["USDTWD=X"]

        response = client.get("/api/quotes/exchange-rate")

        assert response.status_code == 503
        assert response.json()["error"] == "DATA_UNAVAILABLE"


class TestHistoryAPI:

    def test_history_passes_days_and_interval(self, client, market_provider):
        market_provider.histories["AAPL"] = make_bars([180.0, 182.0, 185.5])

        response = client.get("/api/quotes/AAPL/history", params={"days": 30, "interval": "1wk"})

        assert response.status_code == 200
        assert [bar["close"] for bar in response.json()] == [180.0, 182.0, 185.5]
        assert market_provider.history_calls[-1] == ("AAPL", Market.US, 30, "1wk")

    def test_days_out_of_range_is_422(self, client):
        assert client.get("/api/quotes/AAPL/history", params={"days": 0}).status_code == 422

    def test_unknown_symbol_has_empty_history(self, client):
        response = client.get("/api/quotes/ZZZZ/history")

        assert response.status_code == 200
        assert response.json() == []


class TestAnalysisAPI:

    def test_technicals(self, client, market_provider):
        market_provider.histories["AAPL"] = make_bars([100.0 + i for i in range(70)])

        response = client.get("/api/quotes/AAPL/technicals")

        assert response.status_code == 200
        data = response.json()
        assert data["ma5"] == pytest.approx(167.0)
        assert data["week52_low"] == 100.0
        assert data["trend"] in {"strong_up", "up"}

    def test_technicals_without_any_data_is_404(self, client):
        assert client.get("/api/quotes/ZZZZ/technicals").status_code == 404

    def test_summary(self, client):
        """
        GIVEN a quote for AAPL and no history
        WHEN requesting the summary
        THEN neutral technicals and an overall verdict are returned
        """
        response = client.get("/api/quotes/AAPL/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["market"] == "US"
        assert data["quote"]["close"] == 185.50
        assert data["technicals"]["rsi14"] == 50
        assert data["summary_text"].startswith("Overall:")
        assert data["history_length"] == 0
        assert data["as_of"]

    def test_summary_unknown_symbol_is_404(self, client):
        assert client.get("/api/quotes/ZZZZ/summary").status_code == 404


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["timestamp"]

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
        assert response.json()["version"] == __version__
