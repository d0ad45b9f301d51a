"""Market data providers module."""

from stockwatch.providers.market_data_provider import MarketDataProvider
from stockwatch.providers.stub_provider import StubMarketDataProvider
from stockwatch.providers.yahoo_provider import YahooMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YahooMarketDataProvider",
]
