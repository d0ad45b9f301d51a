"""Market data provider protocol and shared helpers."""

from typing import Optional, Protocol

from stockwatch.core.timezone import parse_bar_date
from stockwatch.domain.models import Market, PriceBar, Quote

INTRADAY_INTERVALS = ("1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h")
SUPPORTED_INTERVALS = ("1m", "5m", "15m", "30m", "60m", "1d", "1wk", "1mo", "1y")
DEFAULT_INTERVAL = "1d"


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations return ``None`` / ``[]`` for symbols they cannot serve.
    Raising is allowed; the service layer treats it as missing data.
    """

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        """Fetch the latest quote for one symbol."""
        ...

    def get_history(
        self,
        symbol: str,
        market: Market,
        days: int = 30,
        interval: str = DEFAULT_INTERVAL,
    ) -> list[PriceBar]:
        """Fetch bars for the last ``days`` calendar days, ascending by date."""
        ...


def normalize_interval(interval: Optional[str]) -> str:
    """Return a supported interval, falling back to daily bars."""
    return interval if interval in SUPPORTED_INTERVALS else DEFAULT_INTERVAL


def is_intraday(interval: str) -> bool:
    return interval in INTRADAY_INTERVALS


def dedupe_and_sort(bars: list[PriceBar]) -> list[PriceBar]:
    """Drop bars without a positive close and duplicate dates; sort ascending."""
    seen: set[str] = set()
    result: list[PriceBar] = []
    for bar in bars:
        if not bar.close or bar.close <= 0 or bar.close != bar.close:
            continue
        if bar.date in seen:
            continue
        seen.add(bar.date)
        result.append(bar)
    result.sort(key=lambda b: b.date)
    return result


def aggregate_to_yearly(bars: list[PriceBar]) -> list[PriceBar]:
    """Collapse (monthly) bars into one bar per calendar year."""
    by_year: dict[int, list[PriceBar]] = {}
    for bar in bars:
        by_year.setdefault(parse_bar_date(bar.date).year, []).append(bar)

    yearly: list[PriceBar] = []
    for year in sorted(by_year):
        group = by_year[year]
        lows = [b.low for b in group if b.low > 0]
        yearly.append(
            PriceBar(
                date=f"{year}-01-01",
                open=group[0].open,
                high=max(b.high for b in group),
                low=min(lows) if lows else group[0].low,
                close=group[-1].close,
                volume=sum(b.volume for b in group),
            )
        )
    return yearly
