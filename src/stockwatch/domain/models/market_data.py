"""Price bar and quote models."""

from dataclasses import dataclass


@dataclass
class PriceBar:
    """
    One trading interval's OHLCV.

    ``date`` is YYYY-MM-DD for daily and longer intervals, a full ISO
    timestamp for intraday bars. Histories are ordered by date ascending.
    """

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass
class Quote(PriceBar):
    """Latest known price state for one symbol."""

    symbol: str = ""
    previous_close: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0
    is_market_closed: bool = False

    @classmethod
    def from_bar(
        cls,
        symbol: str,
        bar: PriceBar,
        previous_close: float,
        is_market_closed: bool = False,
    ) -> "Quote":
        """Build a quote from a bar, deriving change fields from previous close."""
        if is_market_closed:
            change = 0.0
            change_percent = 0.0
        else:
            change = bar.close - previous_close
            change_percent = change / previous_close * 100 if previous_close > 0 else 0.0
        return cls(
            date=bar.date,
            open=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
            volume=bar.volume,
            symbol=symbol,
            previous_close=previous_close,
            change=change,
            change_percent=change_percent,
            is_market_closed=is_market_closed,
        )
