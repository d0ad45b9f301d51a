"""
Technical indicator computation over a price history.

Every function here is pure and total: short histories and flat prices
produce documented neutral defaults instead of errors. The thresholds are
empirically chosen defaults, not calibrated financial advice.
"""

from dataclasses import dataclass
from typing import Optional

from stockwatch.domain.models import PriceBar, Trend
from stockwatch.domain.views import TechnicalSnapshot


@dataclass(frozen=True)
class IndicatorThresholds:
    """Tunable bands and weights used by the signal list and trend score."""

    rsi_period: int = 14
    volume_lookback: int = 20

    # RSI zones for signals
    rsi_overbought: float = 80
    rsi_strong: float = 70
    rsi_oversold: float = 20
    rsi_weak: float = 30

    # Volume ratio bands
    volume_burst: float = 2.0
    volume_expanding: float = 1.5
    volume_drying_up: float = 0.5

    # 52-week position bands (percent)
    near_high: float = 90
    near_low: float = 10

    # Trend score inputs
    rsi_bullish: float = 55
    rsi_bearish: float = 45
    rsi_bearish_penalty: int = 2

    # Trend score cutoffs
    strong_up_score: int = 4
    up_score: int = 2
    strong_down_score: int = -3
    down_score: int = -1


DEFAULT_THRESHOLDS = IndicatorThresholds()

# Minimum bars needed to compare this bar's MA5/MA20 with the previous bar's
_CROSS_MIN_BARS = 22

_TREND_TEXT = {
    Trend.STRONG_UP: "strong uptrend",
    Trend.UP: "leaning bullish",
    Trend.NEUTRAL: "range-bound",
    Trend.DOWN: "leaning bearish",
    Trend.STRONG_DOWN: "strong downtrend",
}


def moving_average(closes: list[float], period: int) -> float:
    """Mean of the last ``period`` closes; the last close if history is shorter."""
    if len(closes) < period:
        return closes[-1] if closes else 0.0
    window = closes[-period:]
    return sum(window) / period


def relative_strength_index(closes: list[float], period: int = 14) -> float:
    """RSI over the last ``period`` close-to-close moves; 50 without enough data."""
    if len(closes) < period + 1:
        return 50.0
    gains = 0.0
    losses = 0.0
    for i in range(len(closes) - period, len(closes)):
        diff = closes[i] - closes[i - 1]
        if diff >= 0:
            gains += diff
        else:
            losses -= diff
    if losses == 0:
        return 100.0
    rs = (gains / period) / (losses / period)
    return 100 - 100 / (1 + rs)


def volume_ratio(history: list[PriceBar], lookback: int = 20) -> float:
    """Latest volume over the mean of up to ``lookback`` bars before it."""
    if len(history) < 2:
        return 1.0
    latest = history[-1]
    window = history[-(lookback + 1):-1]
    if not window:
        return 1.0
    average = sum(bar.volume for bar in window) / len(window)
    return latest.volume / average if average > 0 else 1.0


def week52_range(closes: list[float], current_price: float) -> tuple[float, float, float]:
    """
    Return (high, low, position) over the supplied closes.

    This uses whatever history was given rather than a strict 52-week window.
    Position is 50 when high equals low.
    """
    high = max(closes) if closes else current_price
    low = min(closes) if closes else current_price
    if high > low:
        position = (current_price - low) / (high - low) * 100
    else:
        position = 50.0
    return high, low, position


def trend_score(
    current_price: float,
    ma5: float,
    ma20: float,
    ma60: float,
    rsi14: float,
    thresholds: IndicatorThresholds = DEFAULT_THRESHOLDS,
) -> int:
    score = 0
    if current_price > ma5:
        score += 1
    if current_price > ma20:
        score += 1
    if current_price > ma60:
        score += 1
    if ma5 > ma20:
        score += 1
    if rsi14 > thresholds.rsi_bullish:
        score += 1
    if rsi14 < thresholds.rsi_bearish:
        score -= thresholds.rsi_bearish_penalty
    if current_price < ma5:
        score -= 1
    if current_price < ma20:
        score -= 1
    return score


def classify_trend(score: int, thresholds: IndicatorThresholds = DEFAULT_THRESHOLDS) -> Trend:
    if score >= thresholds.strong_up_score:
        return Trend.STRONG_UP
    if score >= thresholds.up_score:
        return Trend.UP
    if score <= thresholds.strong_down_score:
        return Trend.STRONG_DOWN
    if score <= thresholds.down_score:
        return Trend.DOWN
    return Trend.NEUTRAL


def detect_cross(closes: list[float]) -> tuple[bool, bool]:
    """Return (golden_cross, death_cross) between the previous and latest bar."""
    if len(closes) < _CROSS_MIN_BARS:
        return False, False
    ma5 = moving_average(closes, 5)
    ma20 = moving_average(closes, 20)
    prev_ma5 = moving_average(closes[:-1], 5)
    prev_ma20 = moving_average(closes[:-1], 20)
    golden = prev_ma5 < prev_ma20 and ma5 > ma20
    death = prev_ma5 > prev_ma20 and ma5 < ma20
    return golden, death


def _alignment_signal(current_price: float, ma5: float, ma20: float, ma60: float) -> Optional[str]:
    if current_price > ma5 > ma20 > ma60:
        return "Price above all moving averages, bullish alignment"
    if current_price < ma5 < ma20 < ma60:
        return "Price below all moving averages, bearish alignment"
    if current_price > ma20:
        return "Price holding above MA20, short-to-mid term bias up"
    if current_price < ma20:
        return "Price broke below MA20, watch for support"
    return None


def _rsi_signal(rsi14: float, thresholds: IndicatorThresholds) -> str:
    if rsi14 > thresholds.rsi_overbought:
        return f"RSI {rsi14:.0f}, overbought (>{thresholds.rsi_overbought:g}), pullback risk"
    if rsi14 > thresholds.rsi_strong:
        return f"RSI {rsi14:.0f}, strong but nearing overbought"
    if rsi14 < thresholds.rsi_oversold:
        return f"RSI {rsi14:.0f}, oversold (<{thresholds.rsi_oversold:g}), rebound possible"
    if rsi14 < thresholds.rsi_weak:
        return f"RSI {rsi14:.0f}, weak but nearing oversold"
    return f"RSI {rsi14:.0f}, within normal range"


def _volume_signal(ratio: float, thresholds: IndicatorThresholds) -> Optional[str]:
    if ratio > thresholds.volume_burst:
        return f"Volume is {ratio:.1f}x the average, a volume burst"
    if ratio > thresholds.volume_expanding:
        return f"Volume expanding ({ratio:.1f}x average), attention rising"
    if ratio < thresholds.volume_drying_up:
        return "Volume drying up, market is waiting"
    return None


def _range_signal(position: float, thresholds: IndicatorThresholds) -> Optional[str]:
    if position > thresholds.near_high:
        return "Near the 52-week high, watch for resistance"
    if position < thresholds.near_low:
        return "Near the 52-week low, watch for a base"
    return None


def compute_technicals(
    history: list[PriceBar],
    current_price: float,
    thresholds: Optional[IndicatorThresholds] = None,
) -> TechnicalSnapshot:
    """
    Derive a technical snapshot from a date-ascending history.

    At least 60 bars are needed for MA60 to be meaningful; shorter histories
    still produce a snapshot using the degenerate fallbacks. Signals are
    ordered: alignment, cross, RSI zone, volume, 52-week proximity.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    closes = [bar.close for bar in history]

    ma5 = moving_average(closes, 5)
    ma20 = moving_average(closes, 20)
    ma60 = moving_average(closes, 60)
    rsi14 = relative_strength_index(closes, thresholds.rsi_period)
    ratio = volume_ratio(history, thresholds.volume_lookback)
    high, low, position = week52_range(closes, current_price)
    golden, death = detect_cross(closes)

    signals: list[str] = []
    alignment = _alignment_signal(current_price, ma5, ma20, ma60)
    if alignment:
        signals.append(alignment)
    if golden:
        signals.append("MA5 just crossed above MA20, golden cross buy signal")
    if death:
        signals.append("MA5 fell below MA20, death cross sell signal")
    signals.append(_rsi_signal(rsi14, thresholds))
    for optional in (_volume_signal(ratio, thresholds), _range_signal(position, thresholds)):
        if optional:
            signals.append(optional)

    trend = classify_trend(
        trend_score(current_price, ma5, ma20, ma60, rsi14, thresholds),
        thresholds,
    )

    analysis = (
        f"Technicals overall: {_TREND_TEXT[trend]}. "
        f"MA5={ma5:.1f}, MA20={ma20:.1f}, MA60={ma60:.1f}. "
        f"Price sits at {position:.0f}% of its 52-week range "
        f"(high {high:.1f}, low {low:.1f})."
    )

    return TechnicalSnapshot(
        ma5=ma5,
        ma20=ma20,
        ma60=ma60,
        rsi14=rsi14,
        volume_ratio=ratio,
        week52_high=high,
        week52_low=low,
        week52_position=position,
        trend=trend,
        signals=signals,
        analysis=analysis,
        golden_cross=golden,
        death_cross=death,
    )
