"""
Yahoo Finance market data provider via yfinance.

TW symbols are listed as ``<code>.TW`` (main board) or ``<code>.TWO``
(OTC); each candidate is tried in turn and the one that answers is
remembered in an injectable TTL cache. Failures are logged and reported as
missing data.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional

import pandas as pd

from stockwatch.core.cache import TTLCache
from stockwatch.core.timezone import market_today, now_utc
from stockwatch.domain.models import Market, PriceBar, Quote
from stockwatch.providers.market_data_provider import (
    DEFAULT_INTERVAL,
    aggregate_to_yearly,
    dedupe_and_sort,
    is_intraday,
    normalize_interval,
)

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


# Retired spot tickers mapped to their continuous futures contracts
SYMBOL_ALIASES: dict[str, str] = {
    "XAUUSD=X": "GC=F",
    "XAGUSD=X": "SI=F",
    "XPDUSD=X": "PA=F",
    "XPTUSD=X": "PL=F",
}

_TW_SUFFIXES = (".TW", ".TWO")
_FUTURES_SUFFIXES = (".CMX", ".CBT", ".CME", ".NYM")
_MONTHLY_FUTURE = re.compile(r"^[A-Z]{2,4}[FGHJKMNQUVXZ]\d{2}$")


def ticker_candidates(symbol: str, market: Market) -> list[str]:
    """Yahoo tickers to try, in order, for a user-facing symbol."""
    if market == Market.TW:
        return [symbol + suffix for suffix in _TW_SUFFIXES]
    effective = SYMBOL_ALIASES.get(symbol.upper(), symbol)
    candidates = [effective]
    if _MONTHLY_FUTURE.match(effective):
        candidates.extend(effective + suffix for suffix in _FUTURES_SUFFIXES)
    return candidates


def _frame_to_bars(df: Optional[pd.DataFrame], intraday: bool) -> list[PriceBar]:
    """Convert a yfinance history frame into price bars."""
    if df is None or df.empty:
        return []
    bars: list[PriceBar] = []
    for idx, row in df.iterrows():
        close = row.get("Close")
        if close is None or pd.isna(close):
            continue
        stamp = pd.Timestamp(idx)
        bar_date = stamp.isoformat() if intraday else stamp.strftime("%Y-%m-%d")
        bars.append(
            PriceBar(
                date=bar_date,
                open=_num(row.get("Open")),
                high=_num(row.get("High")),
                low=_num(row.get("Low")),
                close=float(close),
                volume=_num(row.get("Volume")),
            )
        )
    return dedupe_and_sort(bars)


def _num(value) -> float:
    if value is None or pd.isna(value):
        return 0.0
    return float(value)


class YahooMarketDataProvider:
    """Fetches quotes and history from Yahoo Finance via yfinance."""

    def __init__(self, ticker_cache: Optional[TTLCache] = None):
        self._resolved = ticker_cache if ticker_cache is not None else TTLCache(ttl_seconds=86400)

    def _download(self, ticker: str, start: datetime, end: datetime, interval: str) -> pd.DataFrame:
        yf = _get_yf()
        return yf.Ticker(ticker).history(
            start=start,
            end=end,
            interval=interval,
            auto_adjust=False,
        )

    def _fetch_bars(
        self,
        symbol: str,
        market: Market,
        start: datetime,
        end: datetime,
        interval: str,
    ) -> list[PriceBar]:
        """Try the resolved ticker first, then every candidate, until one answers."""
        key = (market.value, symbol)
        candidates = ticker_candidates(symbol, market)
        resolved = self._resolved.get(key)
        if resolved:
            candidates = [resolved] + [c for c in candidates if c != resolved]

        intraday = is_intraday(interval)
        for ticker in candidates:
            try:
                bars = _frame_to_bars(self._download(ticker, start, end, interval), intraday)
            except Exception as exc:
                logger.warning("History fetch failed for %s (%s): %s", symbol, ticker, exc)
                continue
            if bars:
                self._resolved.set(key, ticker)
                return bars
        return []

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        """
        Latest quote from the last two daily bars.

        The market counts as closed when the latest bar is not from today in
        the exchange's timezone; the change fields are then zero.
        """
        end = now_utc() + timedelta(days=1)
        bars = self._fetch_bars(symbol, market, end - timedelta(days=10), end, "1d")
        if not bars:
            logger.info("No quote available for %s (%s)", symbol, market.value)
            return None

        latest = bars[-1]
        previous_close = bars[-2].close if len(bars) > 1 else latest.close
        is_closed = latest.date != market_today(market)
        return Quote.from_bar(symbol, latest, previous_close, is_market_closed=is_closed)

    def get_history(
        self,
        symbol: str,
        market: Market,
        days: int = 30,
        interval: str = DEFAULT_INTERVAL,
    ) -> list[PriceBar]:
        """Bars for the last ``days`` days; '1y' aggregates monthly bars per year."""
        interval = normalize_interval(interval)
        if interval == "1m":
            # Yahoo rejects long minute-bar ranges
            days = min(days, 2)

        end = now_utc() + timedelta(days=1)
        start = end - timedelta(days=days + 1)

        if interval == "1y":
            return aggregate_to_yearly(self._fetch_bars(symbol, market, start, end, "1mo"))
        return self._fetch_bars(symbol, market, start, end, interval)
