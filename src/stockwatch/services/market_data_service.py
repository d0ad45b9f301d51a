"""Market data service for quotes and history."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Optional, TypeVar

from stockwatch.core.cache import TTLCache
from stockwatch.domain.models import Market, PriceBar, Quote
from stockwatch.providers.market_data_provider import DEFAULT_INTERVAL, MarketDataProvider

logger = logging.getLogger(__name__)

EXCHANGE_RATE_SYMBOL = "USDTWD=X"

T = TypeVar("T")


class MarketDataService:
    """
    Service for fetching market data (quotes, history).

    Wraps a provider with a quote cache and graceful degradation: a provider
    error or timeout is logged and reported as missing data, never raised.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        quote_cache: Optional[TTLCache] = None,
        fetch_timeout_seconds: float = 10.0,
        max_workers: int = 8,
    ):
        self._provider = provider
        self._quote_cache = quote_cache if quote_cache is not None else TTLCache(ttl_seconds=60)
        self._fetch_timeout = fetch_timeout_seconds
        self._max_workers = max_workers

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        """Fetch one quote, using the cache when fresh."""
        key = (market.value, symbol.upper())
        cached = self._quote_cache.get(key)
        if cached is not None:
            return cached

        try:
            quote = self._provider.get_quote(symbol, market)
        except Exception as exc:
            logger.warning("Quote fetch failed for %s (%s): %s", symbol, market.value, exc)
            return None

        if quote is not None:
            self._quote_cache.set(key, quote)
        return quote

    def _fan_out(
        self,
        fetch: Callable[[str, Market], Optional[T]],
        requests: list[tuple[str, Market]],
        what: str,
    ) -> dict[str, T]:
        """
        Run ``fetch`` for every (symbol, market) pair in a thread pool.

        All fetches share a single deadline of ``fetch_timeout_seconds``.
        Anything unfinished by then, and any ``None`` result, is left out.
        """
        unique = list(dict.fromkeys(requests))
        if not unique:
            return {}

        pool = ThreadPoolExecutor(max_workers=min(self._max_workers, len(unique)))
        try:
            futures = {pool.submit(fetch, symbol, market): symbol for symbol, market in unique}
            done, pending = wait(futures, timeout=self._fetch_timeout)
        finally:
            # Queued fetches are cancelled; a running one cannot be interrupted
            pool.shutdown(wait=False, cancel_futures=True)

        if pending:
            late = sorted(futures[f] for f in pending)
            logger.warning("%s fetch timed out for %s", what, ", ".join(late))

        result: dict[str, T] = {}
        for future, symbol in futures.items():
            if future not in done:
                continue
            value = future.result()
            if value is not None:
                result[symbol] = value
        return result

    def get_quotes(self, requests: list[tuple[str, Market]]) -> dict[str, Quote]:
        """
        Fetch quotes for several (symbol, market) pairs concurrently.

        Returns symbol -> Quote; symbols that fail or time out are omitted.
        """
        return self._fan_out(self.get_quote, requests, "Quote")

    def get_history(
        self,
        symbol: str,
        market: Market,
        days: int = 30,
        interval: str = DEFAULT_INTERVAL,
    ) -> list[PriceBar]:
        """Fetch a date-ascending history; empty on provider failure."""
        try:
            return self._provider.get_history(symbol, market, days=days, interval=interval)
        except Exception as exc:
            logger.warning("History fetch failed for %s (%s): %s", symbol, market.value, exc)
            return []

    def get_histories(
        self,
        requests: list[tuple[str, Market]],
        days: int = 30,
        interval: str = DEFAULT_INTERVAL,
    ) -> dict[str, list[PriceBar]]:
        """Fetch histories for several symbols concurrently; timed-out symbols are omitted."""
        return self._fan_out(
            lambda symbol, market: self.get_history(symbol, market, days=days, interval=interval),
            requests,
            "History",
        )

    def get_exchange_rate(self) -> Optional[float]:
        """USD/TWD rate, or None when unavailable."""
        quote = self.get_quote(EXCHANGE_RATE_SYMBOL, Market.US)
        if quote is None or quote.close <= 0:
            return None
        return quote.close
