"""
Unit tests for rebalance recommendations.

Tests cover:
- Buy/sell quantities in shares (US) and lots (TW)
- Mode filtering
- Half-up rounding and minimum trade thresholds
- Degenerate prices and totals
"""

import pytest

from stockwatch.domain.models import Holding, RebalanceMode, RebalanceSide
from stockwatch.domain.views import HoldingDetail
from stockwatch.services.rebalance import compute_rebalance
from stockwatch.services.valuation import compute_holding_details


def _holding(symbol: str, shares: float, target: float, hid: int = 1) -> Holding:
    return Holding(
        id=hid,
        group_id=1,
        symbol=symbol,
        name=f"{symbol} Inc",
        shares=shares,
        cost_price=10.0,
        target_allocation=target,
    )


def _detail(symbol: str, price: float, market_value: float, target: float, total: float) -> HoldingDetail:
    current = market_value / total * 100 if total else 0.0
    return HoldingDetail(
        holding=_holding(symbol, 0, target),
        current_price=price,
        market_value=market_value,
        profit_loss=0.0,
        profit_loss_percent=0.0,
        current_allocation=current,
        allocation_diff=current - target,
    )


@pytest.fixture
def underweight_and_overweight():
    """AAPL 3000 (30%) and MSFT 7000 (70%), both targeting 50%."""
    holdings = [
        _holding("AAPL", 150, 50, hid=1),
        _holding("MSFT", 70, 50, hid=2),
    ]
    return compute_holding_details(holdings, {"AAPL": 20.0, "MSFT": 100.0})


class TestRebalanceQuantities:
    """Quantity and amount computation."""

    def test_underweight_us_holding_buys_shares(self, underweight_and_overweight):
        """
        GIVEN total 10,000, target 50%, current value 3,000, US price 20
        WHEN rebalancing
        THEN the plan buys 100 shares for 2,000
        """
        valuation = underweight_and_overweight
        actions = compute_rebalance(valuation.details, valuation.total_market_value)

        buy = next(a for a in actions if a.symbol == "AAPL")
        assert buy.action == RebalanceSide.BUY
        assert buy.shares == 100
        assert buy.amount == pytest.approx(2000.0)
        assert "30.0% -> target 50.0%" in buy.reason
        assert "100 share" in buy.reason

    def test_overweight_holding_sells_with_positive_quantities(self, underweight_and_overweight):
        """
        GIVEN MSFT at 70% targeting 50%
        WHEN rebalancing
        THEN a sell action reports positive shares and amount
        """
        valuation = underweight_and_overweight
        actions = compute_rebalance(valuation.details, valuation.total_market_value)

        sell = next(a for a in actions if a.symbol == "MSFT")
        assert sell.action == RebalanceSide.SELL
        assert sell.shares == 20
        assert sell.amount == pytest.approx(2000.0)
        assert sell.name == "MSFT Inc"

    def test_tw_holding_rounds_to_tenth_of_lot(self):
        """
        GIVEN a TW holding 10 points under target at price 500
        WHEN rebalancing
        THEN the quantity is in lots rounded to 0.1
        """
        holdings = [
            _holding("2330", 1, 60, hid=1),     # 500,000
            _holding("AAPL", 1000, 40, hid=2),  # 500,000
        ]
        valuation = compute_holding_details(holdings, {"2330": 500.0, "AAPL": 500.0})
        actions = compute_rebalance(valuation.details, valuation.total_market_value)

        tw = next(a for a in actions if a.symbol == "2330")
        assert tw.action == RebalanceSide.BUY
        assert tw.shares == pytest.approx(0.2)
        assert "0.2 lot" in tw.reason

        us = next(a for a in actions if a.symbol == "AAPL")
        assert us.action == RebalanceSide.SELL
        assert us.shares == 200

    def test_tw_trade_of_exactly_one_tenth_lot_is_skipped(self):
        """
        GIVEN a TW holding whose rounded trade is exactly 0.1 lot
        WHEN rebalancing
        THEN no TW action is emitted (the threshold is strict)
        """
        holdings = [
            _holding("2330", 1, 55, hid=1),
            _holding("AAPL", 1000, 45, hid=2),
        ]
        valuation = compute_holding_details(holdings, {"2330": 500.0, "AAPL": 500.0})
        actions = compute_rebalance(valuation.details, valuation.total_market_value)

        assert [a.symbol for a in actions] == ["AAPL"]

    def test_half_unit_rounds_up(self):
        """
        GIVEN a US trade of exactly +2.5 shares
        WHEN rebalancing
        THEN it rounds up to 3
        """
        details = [_detail("AAPL", 20.0, 50.0, target=10, total=1000.0)]
        actions = compute_rebalance(details, 1000.0)

        assert actions[0].action == RebalanceSide.BUY
        assert actions[0].shares == 3

    def test_negative_half_unit_rounds_toward_positive(self):
        """
        GIVEN a US trade of exactly -2.5 shares
        WHEN rebalancing
        THEN it rounds to -2 and sells 2
        """
        details = [_detail("AAPL", 20.0, 150.0, target=10, total=1000.0)]
        actions = compute_rebalance(details, 1000.0)

        assert actions[0].action == RebalanceSide.SELL
        assert actions[0].shares == 2
        assert actions[0].amount == pytest.approx(50.0)

    def test_non_positive_price_treated_as_one(self):
        details = [_detail("AAPL", 0.0, 0.0, target=10, total=1000.0)]
        actions = compute_rebalance(details, 1000.0)

        assert actions[0].shares == 100


class TestRebalanceFiltering:
    """Mode and threshold filtering."""

    def test_buy_only_yields_no_sells(self, underweight_and_overweight):
        valuation = underweight_and_overweight
        actions = compute_rebalance(
            valuation.details, valuation.total_market_value, RebalanceMode.BUY_ONLY
        )

        assert actions
        assert all(a.action == RebalanceSide.BUY for a in actions)

    def test_sell_only_yields_no_buys(self, underweight_and_overweight):
        valuation = underweight_and_overweight
        actions = compute_rebalance(
            valuation.details, valuation.total_market_value, RebalanceMode.SELL_ONLY
        )

        assert actions
        assert all(a.action == RebalanceSide.SELL for a in actions)

    def test_mode_accepts_plain_string(self, underweight_and_overweight):
        valuation = underweight_and_overweight
        actions = compute_rebalance(valuation.details, valuation.total_market_value, "buy_only")

        assert [a.symbol for a in actions] == ["AAPL"]

    def test_small_allocation_diff_yields_no_action(self):
        """
        GIVEN holdings within 1 point of target (50.5% / 49.5% vs 50%)
        WHEN rebalancing
        THEN no actions are emitted
        """
        holdings = [
            _holding("AAPL", 101, 50, hid=1),
            _holding("MSFT", 99, 50, hid=2),
        ]
        valuation = compute_holding_details(holdings, {"AAPL": 50.0, "MSFT": 50.0})

        assert compute_rebalance(valuation.details, valuation.total_market_value) == []

    def test_zero_total_yields_no_actions(self):
        details = [_detail("AAPL", 20.0, 0.0, target=50, total=0.0)]

        assert compute_rebalance(details, 0.0) == []


class TestHalfLotRounding:
    """TW quantities round half up to a tenth of a lot."""

    @pytest.mark.parametrize(
        "target,expected_lots",
        [
            (15, 0.2),
            (35, 0.4),
        ],
    )
    def test_half_tenth_rounds_up(self, target, expected_lots):
        """
        GIVEN a TW holding at price 1000 needing exactly 0.15 or 0.35 lot
        WHEN rebalancing a 1,000,000 portfolio
        THEN the buy rounds up to 0.2 or 0.4 lot
        """
        details = [_detail("2330", 1000.0, 0.0, target=target, total=1_000_000.0)]
        actions = compute_rebalance(details, 1_000_000.0)

        assert len(actions) == 1
        assert actions[0].action == RebalanceSide.BUY
        assert actions[0].shares == pytest.approx(expected_lots)
        assert f"{expected_lots:.1f} lot" in actions[0].reason

    def test_negative_half_tenth_rounds_toward_positive(self):
        """
        GIVEN a TW holding 0.35 lot over target
        WHEN rebalancing
        THEN it sells 0.3 lot
        """
        details = [_detail("2330", 1000.0, 350_000.0, target=0, total=1_000_000.0)]
        actions = compute_rebalance(details, 1_000_000.0)

        assert actions[0].action == RebalanceSide.SELL
        assert actions[0].shares == pytest.approx(0.3)
