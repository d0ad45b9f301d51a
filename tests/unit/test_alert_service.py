"""
Unit tests for AlertService.

Tests cover alert CRUD and checking active alerts against live data.
"""

import pytest

from stockwatch.core.exceptions import NotFoundError, ValidationError
from stockwatch.domain.models import AlertCondition
from tests.conftest import make_bars


class TestAlertCrud:

    def test_create_alert(self, alert_service):
        alert = alert_service.create_alert("aapl", "price_above", 200)

        assert alert.id is not None
        assert alert.symbol == "AAPL"
        assert alert.condition_type == AlertCondition.PRICE_ABOVE
        assert alert.is_active is True
        assert alert.triggered_at is None

    def test_unknown_condition_rejected(self, alert_service):
        with pytest.raises(ValidationError):
            alert_service.create_alert("AAPL", "moon_phase", 1)

    @pytest.mark.parametrize("condition", ["price_above", "price_below", "volume_spike"])
    def test_threshold_required_for_price_and_volume(self, alert_service, condition):
        with pytest.raises(ValidationError):
            alert_service.create_alert("AAPL", condition)

        assert alert_service.list_alerts() == []

    def test_cross_alert_stores_zero_threshold(self, alert_service):
        alert = alert_service.create_alert("AAPL", AlertCondition.DEATH_CROSS)

        assert alert.threshold == 0

    def test_toggle_active(self, alert_service):
        alert = alert_service.create_alert("AAPL", AlertCondition.PRICE_BELOW, 100)

        assert alert_service.set_active(alert.id, False).is_active is False
        assert alert_service.get_alert(alert.id).is_active is False

    def test_delete(self, alert_service):
        alert = alert_service.create_alert("AAPL", AlertCondition.PRICE_BELOW, 100)

        alert_service.delete_alert(alert.id)

        assert alert_service.list_alerts() == []
        with pytest.raises(NotFoundError):
            alert_service.delete_alert(alert.id)


class TestCheckAlerts:

    def test_price_alerts(self, alert_service):
        """
        GIVEN AAPL at 185.50 with one alert above 180 and one below 100
        WHEN checking alerts
        THEN only the first fires and gets a trigger time
        """
        above = alert_service.create_alert("AAPL", AlertCondition.PRICE_ABOVE, 180)
        alert_service.create_alert("AAPL", AlertCondition.PRICE_BELOW, 100)

        triggered = alert_service.check_alerts()

        assert [a.id for a in triggered] == [above.id]
        assert triggered[0].triggered_at is not None
        assert alert_service.get_alert(above.id).triggered_at is not None

    def test_inactive_alerts_are_skipped(self, alert_service):
        alert = alert_service.create_alert("AAPL", AlertCondition.PRICE_ABOVE, 1)
        alert_service.set_active(alert.id, False)

        assert alert_service.check_alerts() == []

    def test_volume_spike_uses_history(self, alert_service, market_provider):
        market_provider.histories["AAPL"] = make_bars(
            [180.0] * 21, volumes=[100.0] * 20 + [500.0]
        )
        alert = alert_service.create_alert("AAPL", AlertCondition.VOLUME_SPIKE, 2.0)

        triggered = alert_service.check_alerts()

        assert [a.id for a in triggered] == [alert.id]
        assert market_provider.history_calls[0][0] == "AAPL"

    def test_price_only_alerts_skip_history(self, alert_service, market_provider):
        alert_service.create_alert("AAPL", AlertCondition.PRICE_ABOVE, 1)

        alert_service.check_alerts()

        assert market_provider.history_calls == []

    def test_unquoted_symbol_never_fires(self, alert_service):
        alert_service.create_alert("NOPE", AlertCondition.PRICE_BELOW, 1_000_000)

        assert alert_service.check_alerts() == []

    def test_no_active_alerts(self, alert_service):
        assert alert_service.check_alerts() == []

    def test_histories_fetched_once_per_symbol(self, alert_service, market_provider):
        """
        GIVEN history-based alerts on two symbols and a price alert on a third
        WHEN checking alerts
        THEN one history is fetched for each of the two symbols only
        """
        alert_service.create_alert("AAPL", AlertCondition.VOLUME_SPIKE, 2.0)
        alert_service.create_alert("AAPL", AlertCondition.GOLDEN_CROSS)
        alert_service.create_alert("MSFT", AlertCondition.BREAKOUT_HIGH)
        alert_service.create_alert("TSLA", AlertCondition.PRICE_BELOW, 1)

        alert_service.check_alerts()

        assert sorted(call[0] for call in market_provider.history_calls) == ["AAPL", "MSFT"]
