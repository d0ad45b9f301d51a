"""Portfolio valuation: holdings plus live prices into holding details."""

from typing import Mapping, Optional

from stockwatch.domain.market import classify_market, unit_size
from stockwatch.domain.models import Holding
from stockwatch.domain.views import HoldingDetail, PortfolioValuation


def _market_value(price: float, shares: float, symbol: str) -> float:
    return price * shares * unit_size(classify_market(symbol))


def compute_holding_details(
    holdings: list[Holding],
    prices: Mapping[str, Optional[float]],
) -> PortfolioValuation:
    """
    Value a group's holdings against current prices.

    A symbol whose price is missing or non-positive is valued at its cost
    price, so this never fails on absent quotes. Allocation percentages are
    filled in once the total market value is known.
    """
    details: list[HoldingDetail] = []
    total_market_value = 0.0

    for holding in holdings:
        quoted = prices.get(holding.symbol)
        current_price = quoted if quoted is not None and quoted > 0 else holding.cost_price

        market_value = _market_value(current_price, holding.shares, holding.symbol)
        cost_value = _market_value(holding.cost_price, holding.shares, holding.symbol)
        if holding.cost_price > 0:
            profit_loss_percent = (current_price - holding.cost_price) / holding.cost_price * 100
        else:
            profit_loss_percent = 0.0

        total_market_value += market_value
        details.append(
            HoldingDetail(
                holding=holding,
                current_price=current_price,
                market_value=market_value,
                profit_loss=market_value - cost_value,
                profit_loss_percent=profit_loss_percent,
            )
        )

    for detail in details:
        if total_market_value > 0:
            detail.current_allocation = detail.market_value / total_market_value * 100
        else:
            detail.current_allocation = 0.0
        detail.allocation_diff = detail.current_allocation - detail.target_allocation

    return PortfolioValuation(details=details, total_market_value=total_market_value)
