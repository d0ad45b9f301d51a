"""Rebalance recommendation: target vs. current allocation into trades."""

import math

from stockwatch.domain.market import classify_market, unit_size, unit_label
from stockwatch.domain.models import Market, RebalanceMode, RebalanceSide
from stockwatch.domain.views import HoldingDetail, RebalanceAction

# Holdings within this many percentage points of target are left alone
MIN_ALLOCATION_DIFF = 1.0

# Quantities round to 1/factor of a quoted unit; trades must exceed the minimum
_ROUNDING_FACTOR = {
    Market.TW: 10,
    Market.US: 1,
}
_MIN_TRADE = {
    Market.TW: 0.1,
    Market.US: 1.0,
}


def _round_half_up(value: float, factor: int) -> float:
    """Round to the nearest 1/factor, halves toward +infinity."""
    return math.floor(value * factor + 0.5) / factor


def _format_units(units: float, market: Market) -> str:
    if market == Market.TW:
        return f"{units:.1f}"
    return f"{units:.0f}"


def compute_rebalance(
    details: list[HoldingDetail],
    total_market_value: float,
    mode: RebalanceMode = RebalanceMode.ALL,
) -> list[RebalanceAction]:
    """
    Compute buy/sell actions that move each holding toward its target.

    TW quantities round to 0.1 lot and US quantities to whole shares. A
    zero total market value yields zero targets and no actions.
    """
    mode = RebalanceMode(mode)
    actions: list[RebalanceAction] = []

    for detail in details:
        if abs(detail.allocation_diff) < MIN_ALLOCATION_DIFF:
            continue

        market = classify_market(detail.symbol)
        size = unit_size(market)
        label = unit_label(market)
        price = detail.current_price if detail.current_price > 0 else 1.0

        target_value = detail.target_allocation / 100 * total_market_value
        diff_value = target_value - detail.market_value
        raw_units = diff_value / (price * size)
        units = _round_half_up(raw_units, _ROUNDING_FACTOR[market])

        min_trade = _MIN_TRADE[market]
        progress = (
            f"Currently {detail.current_allocation:.1f}% -> "
            f"target {detail.target_allocation:.1f}%"
        )

        if units > min_trade and mode != RebalanceMode.SELL_ONLY:
            actions.append(
                RebalanceAction(
                    symbol=detail.symbol,
                    name=detail.name,
                    action=RebalanceSide.BUY,
                    shares=units,
                    amount=diff_value,
                    reason=f"{progress}, buy about {_format_units(units, market)} {label}(s)",
                )
            )
        elif units < -min_trade and mode != RebalanceMode.BUY_ONLY:
            actions.append(
                RebalanceAction(
                    symbol=detail.symbol,
                    name=detail.name,
                    action=RebalanceSide.SELL,
                    shares=abs(units),
                    amount=abs(diff_value),
                    reason=f"{progress}, sell about {_format_units(abs(units), market)} {label}(s)",
                )
            )

    return actions
