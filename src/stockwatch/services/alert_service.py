"""Alert service: CRUD plus evaluation against live market data."""

import logging
from typing import Optional

from stockwatch.core.exceptions import NotFoundError, ValidationError
from stockwatch.core.timezone import now_utc
from stockwatch.domain.market import classify_market
from stockwatch.domain.models import Alert, AlertCondition, Quote
from stockwatch.domain.views import TechnicalSnapshot
from stockwatch.repositories.protocols import AlertRepository
from stockwatch.services.market_data_service import MarketDataService
from stockwatch.services.technicals import IndicatorThresholds, compute_technicals

logger = logging.getLogger(__name__)

# Conditions that can be decided from the quote alone
_QUOTE_ONLY = {AlertCondition.PRICE_ABOVE, AlertCondition.PRICE_BELOW}

# Conditions that compare against a user-supplied threshold
_NEEDS_THRESHOLD = {
    AlertCondition.PRICE_ABOVE,
    AlertCondition.PRICE_BELOW,
    AlertCondition.VOLUME_SPIKE,
}


def evaluate_alert(
    alert: Alert,
    quote: Optional[Quote],
    technicals: Optional[TechnicalSnapshot] = None,
) -> bool:
    """
    Return True when an active alert's condition holds.

    Missing data never fires. ``foreign_buy_streak`` needs institutional
    trading data that is not collected, so it never fires either.
    """
    if not alert.is_active or quote is None:
        return False

    condition = alert.condition_type
    if condition == AlertCondition.PRICE_ABOVE:
        return quote.close >= alert.threshold
    if condition == AlertCondition.PRICE_BELOW:
        return quote.close <= alert.threshold

    if technicals is None:
        return False
    if condition == AlertCondition.VOLUME_SPIKE:
        return technicals.volume_ratio >= alert.threshold
    if condition == AlertCondition.BREAKOUT_HIGH:
        return quote.close >= technicals.week52_high
    if condition == AlertCondition.GOLDEN_CROSS:
        return technicals.golden_cross
    if condition == AlertCondition.DEATH_CROSS:
        return technicals.death_cross
    return False


class AlertService:
    """Service for user alerts on symbols."""

    def __init__(
        self,
        alert_repo: AlertRepository,
        market_data_service: MarketDataService,
        history_days: int = 365,
        thresholds: Optional[IndicatorThresholds] = None,
    ):
        self._repo = alert_repo
        self._market = market_data_service
        self._history_days = history_days
        self._thresholds = thresholds

    def list_alerts(self) -> list[Alert]:
        return self._repo.list_all()

    def get_alert(self, alert_id: int) -> Alert:
        alert = self._repo.get_by_id(alert_id)
        if not alert:
            raise NotFoundError("Alert", str(alert_id))
        return alert

    def create_alert(
        self,
        symbol: str,
        condition_type,
        threshold: Optional[float] = None,
    ) -> Alert:
        """
        Create an active alert.

        Price and volume conditions need a threshold; cross and breakout
        conditions ignore it and store 0.
        """
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")
        try:
            condition = AlertCondition(condition_type)
        except ValueError:
            raise ValidationError(f"Unknown alert condition: {condition_type}") from None
        if threshold is None:
            if condition in _NEEDS_THRESHOLD:
                raise ValidationError(f"A threshold is required for {condition.value} alerts")
            threshold = 0.0
        return self._repo.create(
            Alert(id=None, symbol=symbol, condition_type=condition, threshold=threshold)
        )

    def set_active(self, alert_id: int, is_active: bool) -> Alert:
        self.get_alert(alert_id)
        return self._repo.set_active(alert_id, is_active)

    def delete_alert(self, alert_id: int) -> None:
        self.get_alert(alert_id)
        self._repo.delete(alert_id)

    def check_alerts(self) -> list[Alert]:
        """
        Evaluate every active alert and stamp the ones that fire.

        Quotes are fetched once per symbol; history is only fetched for
        symbols with a condition that needs technicals.
        """
        active = self._repo.list_all(active_only=True)
        if not active:
            return []

        symbols = list(dict.fromkeys(a.symbol for a in active))
        quotes = self._market.get_quotes([(s, classify_market(s)) for s in symbols])

        needs_history = [
            s
            for s in symbols
            if s in quotes
            and any(a.symbol == s and a.condition_type not in _QUOTE_ONLY for a in active)
        ]
        histories = self._market.get_histories(
            [(s, classify_market(s)) for s in needs_history], self._history_days
        )
        technicals: dict[str, TechnicalSnapshot] = {
            symbol: compute_technicals(history, quotes[symbol].close, self._thresholds)
            for symbol, history in histories.items()
        }

        triggered: list[Alert] = []
        stamp = now_utc().replace(tzinfo=None)
        for alert in active:
            if evaluate_alert(alert, quotes.get(alert.symbol), technicals.get(alert.symbol)):
                triggered.append(self._repo.mark_triggered(alert.id, stamp))

        if triggered:
            logger.info("%d alert(s) triggered", len(triggered))
        return triggered
