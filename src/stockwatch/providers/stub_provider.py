"""Stub market data provider for offline/testing use."""

import random
from datetime import date, datetime, time, timedelta
from typing import Optional

from stockwatch.core.timezone import market_timezone, now_in_market
from stockwatch.domain.models import Market, PriceBar, Quote
from stockwatch.providers.market_data_provider import (
    DEFAULT_INTERVAL,
    aggregate_to_yearly,
    is_intraday,
    normalize_interval,
)


# Deterministic fake (last_price, prev_close) for common symbols
_STUB_PRICES: dict[str, tuple[float, float]] = {
    "AAPL": (185.50, 184.25),
    "GOOGL": (142.75, 141.50),
    "MSFT": (378.25, 376.80),
    "NVDA": (485.25, 482.50),
    "TSLA": (248.75, 250.10),
    "SPY": (485.25, 484.10),
    "2330": (585.00, 580.00),
    "2317": (104.50, 105.00),
    "0050": (135.20, 134.60),
    "USDTWD=X": (31.85, 31.80),
}


# Local trading session (open, close) per market
_SESSIONS: dict[Market, tuple[time, time]] = {
    Market.TW: (time(9, 0), time(13, 30)),
    Market.US: (time(9, 30), time(16, 0)),
}

_INTERVAL_MINUTES = {"1m": 1, "5m": 5, "15m": 15, "30m": 30, "60m": 60}


def _session_stamps(days: list[date], market: Market, minutes: int) -> list[str]:
    """Exchange-local ISO timestamps of each bar start within the trading session."""
    tz = market_timezone(market)
    open_at, close_at = _SESSIONS[market]
    step = timedelta(minutes=minutes)
    stamps: list[str] = []
    for day in days:
        moment = datetime.combine(day, open_at)
        session_end = datetime.combine(day, close_at)
        while moment < session_end:
            stamps.append(tz.localize(moment).isoformat())
            moment += step
    return stamps


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Known symbols use fixed prices; unknown symbols get a price derived from
    a per-symbol seeded generator. Histories are random walks that end at
    the quoted price, skipping weekends.
    """

    def __init__(self, seed: int = 42):
        self._seed = seed

    def _rng(self, symbol: str) -> random.Random:
        return random.Random(f"{self._seed}:{symbol}")

    def _prices(self, symbol: str) -> tuple[float, float]:
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        rng = self._rng(symbol)
        last_price = round(50 + rng.random() * 200, 2)
        change_pct = (rng.random() - 0.5) * 0.04
        prev_close = round(last_price / (1 + change_pct), 2)
        return last_price, prev_close

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        """Return a stub quote for the symbol."""
        symbol = symbol.upper()
        last_price, prev_close = self._prices(symbol)
        bar = PriceBar(
            date=now_in_market(market).strftime("%Y-%m-%d"),
            open=prev_close,
            high=max(last_price, prev_close),
            low=min(last_price, prev_close),
            close=last_price,
            volume=float(self._rng(symbol).randint(1_000, 50_000) * 100),
        )
        return Quote.from_bar(symbol, bar, previous_close=prev_close)

    def _walk(self, rng: random.Random, last_price: float, count: int) -> list[float]:
        """Random-walk closes, ascending in time, whose last value is ``last_price``."""
        closes: list[float] = []
        price = last_price
        for _ in range(count):
            closes.append(round(price, 2))
            price = max(0.01, price * (1 + rng.gauss(0, 0.015)))
        closes.reverse()
        return closes

    def _bars(self, stamps: list[str], closes: list[float], rng: random.Random) -> list[PriceBar]:
        return [
            PriceBar(
                date=stamp,
                open=close,
                high=round(close * 1.01, 2),
                low=round(close * 0.99, 2),
                close=close,
                volume=float(rng.randint(1_000, 50_000) * 100),
            )
            for stamp, close in zip(stamps, closes)
        ]

    def get_history(
        self,
        symbol: str,
        market: Market,
        days: int = 30,
        interval: str = DEFAULT_INTERVAL,
    ) -> list[PriceBar]:
        """
        Return a deterministic random walk ending at the quoted price.

        Daily bars cover weekdays; intraday bars cover each weekday's
        trading session with ISO timestamps; '1y' aggregates daily bars.
        """
        interval = normalize_interval(interval)
        if interval == "1m":
            days = min(days, 2)

        symbol = symbol.upper()
        last_price, _ = self._prices(symbol)
        rng = self._rng(symbol)

        end = now_in_market(market).date()
        trading_days: list[date] = []
        day = end - timedelta(days=days)
        while day <= end:
            if day.weekday() < 5:
                trading_days.append(day)
            day += timedelta(days=1)

        if is_intraday(interval):
            stamps = _session_stamps(trading_days, market, _INTERVAL_MINUTES[interval])
        else:
            stamps = [d.isoformat() for d in trading_days]

        bars = self._bars(stamps, self._walk(rng, last_price, len(stamps)), rng)
        if interval == "1y":
            return aggregate_to_yearly(bars)
        return bars
