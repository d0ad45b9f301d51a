"""Analysis service for per-symbol technicals and summaries."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from stockwatch.core.exceptions import NotFoundError
from stockwatch.core.timezone import market_today
from stockwatch.domain.models import Market, PriceBar, Quote, Trend
from stockwatch.domain.views import StockSummary, TechnicalSnapshot
from stockwatch.services.market_data_service import MarketDataService
from stockwatch.services.technicals import IndicatorThresholds, compute_technicals

logger = logging.getLogger(__name__)

_VERDICT = {
    Trend.STRONG_UP: "Strong uptrend, suitable for short-term tracking",
    Trend.UP: "Leaning bullish, watch for entry points",
    Trend.NEUTRAL: "Consolidating, direction not yet confirmed",
    Trend.DOWN: "Leaning bearish, consider waiting on the sidelines",
    Trend.STRONG_DOWN: "Strong downtrend, protect positions with stop losses",
}

# Daily moves beyond these percentages get a volatility note
_LARGE_MOVE = 3.0
_SHARP_MOVE = 5.0

_SUMMARY_SIGNALS = 4


def build_summary_text(technicals: TechnicalSnapshot, change_percent: float) -> str:
    """Short plain-text verdict: trend, analysis line, key signals, volatility."""
    lines = [f"Overall: {_VERDICT[technicals.trend]}.", "", f"Technicals: {technicals.analysis}"]

    if technicals.signals:
        lines += ["", "Key signals:"]
        lines += [f"- {signal}" for signal in technicals.signals[:_SUMMARY_SIGNALS]]

    move = abs(change_percent)
    if move > _SHARP_MOVE:
        lines += ["", f"Note: sharp move today ({change_percent:.1f}%), manage risk carefully."]
    elif move > _LARGE_MOVE:
        lines += ["", f"Note: large move today ({change_percent:.1f}%), beware of chasing."]

    return "\n".join(lines).strip()


class AnalysisService:
    """
    Service for single-symbol analytics.

    Combines a live quote with a year of daily history into a technical
    snapshot and a short summary.
    """

    def __init__(
        self,
        market_data_service: MarketDataService,
        history_days: int = 365,
        thresholds: Optional[IndicatorThresholds] = None,
    ):
        self._market = market_data_service
        self._history_days = history_days
        self._thresholds = thresholds

    def _fetch_quote_and_history(
        self,
        symbol: str,
        market: Market,
        days: int,
    ) -> tuple[Optional[Quote], list[PriceBar]]:
        with ThreadPoolExecutor(max_workers=2) as pool:
            quote_future = pool.submit(self._market.get_quote, symbol, market)
            history_future = pool.submit(self._market.get_history, symbol, market, days)
            return quote_future.result(), history_future.result()

    def get_technicals(
        self,
        symbol: str,
        market: Market,
        days: Optional[int] = None,
    ) -> TechnicalSnapshot:
        """
        Technical snapshot against the live price.

        Falls back to the last close in the history when no quote is
        available; raises NotFoundError when neither exists.
        """
        quote, history = self._fetch_quote_and_history(symbol, market, days or self._history_days)
        if quote is not None:
            current_price = quote.close
        elif history:
            current_price = history[-1].close
        else:
            raise NotFoundError("Market data", symbol)
        return compute_technicals(history, current_price, self._thresholds)

    def get_summary(self, symbol: str, market: Market) -> StockSummary:
        """Quote, technicals and summary text for one symbol."""
        quote, history = self._fetch_quote_and_history(symbol, market, self._history_days)
        if quote is None:
            raise NotFoundError("Quote", symbol)
        if not history:
            logger.info("No history for %s, technicals use neutral defaults", symbol)

        technicals = compute_technicals(history, quote.close, self._thresholds)
        return StockSummary(
            symbol=symbol,
            market=market,
            quote=quote,
            technicals=technicals,
            summary_text=build_summary_text(technicals, quote.change_percent),
            history_length=len(history),
            as_of=market_today(market),
        )
