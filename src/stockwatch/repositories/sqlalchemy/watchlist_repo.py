"""SQLAlchemy implementations of the watchlist and alert repositories."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from stockwatch.domain.models import Alert, WatchlistItem
from stockwatch.repositories.sqlalchemy.orm_models import AlertORM, WatchlistORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a new watchlist entry."""
        orm_item = WatchlistORM(
            symbol=item.symbol,
            name=item.name,
            market=item.market,
        )
        self._db.add(orm_item)
        self._db.commit()
        self._db.refresh(orm_item)
        return self._to_domain(orm_item)

    def get_by_symbol(self, symbol: str) -> Optional[WatchlistItem]:
        """Retrieve an entry by symbol."""
        orm_item = self._db.query(WatchlistORM).filter(WatchlistORM.symbol == symbol).first()
        return self._to_domain(orm_item) if orm_item else None

    def list_all(self) -> list[WatchlistItem]:
        """List entries, newest first."""
        orm_items = (
            self._db.query(WatchlistORM)
            .order_by(WatchlistORM.created_at.desc(), WatchlistORM.id.desc())
            .all()
        )
        return [self._to_domain(i) for i in orm_items]

    def update(self, item: WatchlistItem) -> WatchlistItem:
        """Update an entry's name and market."""
        orm_item = self._db.query(WatchlistORM).filter(WatchlistORM.symbol == item.symbol).first()
        if orm_item is None:
            raise ValueError(f"Watchlist item not found: {item.symbol}")
        orm_item.name = item.name
        orm_item.market = item.market
        self._db.commit()
        self._db.refresh(orm_item)
        return self._to_domain(orm_item)

    def delete(self, symbol: str) -> None:
        self._db.query(WatchlistORM).filter(WatchlistORM.symbol == symbol).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: WatchlistORM) -> WatchlistItem:
        """Convert ORM model to domain model."""
        return WatchlistItem(
            id=orm.id,
            symbol=orm.symbol,
            name=orm.name,
            market=orm.market,
            created_at=orm.created_at,
        )


class SqlAlchemyAlertRepository:
    """SQLAlchemy-backed alert repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, alert: Alert) -> Alert:
        """Persist a new alert."""
        orm_alert = AlertORM(
            symbol=alert.symbol,
            condition_type=alert.condition_type,
            threshold=alert.threshold,
            is_active=alert.is_active,
        )
        self._db.add(orm_alert)
        self._db.commit()
        self._db.refresh(orm_alert)
        return self._to_domain(orm_alert)

    def get_by_id(self, alert_id: int) -> Optional[Alert]:
        orm_alert = self._db.get(AlertORM, alert_id)
        return self._to_domain(orm_alert) if orm_alert else None

    def list_all(self, active_only: bool = False) -> list[Alert]:
        """List alerts, newest first."""
        query = self._db.query(AlertORM)
        if active_only:
            query = query.filter(AlertORM.is_active == True)  # noqa: E712
        query = query.order_by(AlertORM.created_at.desc(), AlertORM.id.desc())
        return [self._to_domain(a) for a in query.all()]

    def set_active(self, alert_id: int, is_active: bool) -> Alert:
        orm_alert = self._db.get(AlertORM, alert_id)
        if orm_alert is None:
            raise ValueError(f"Alert not found: {alert_id}")
        orm_alert.is_active = is_active
        self._db.commit()
        self._db.refresh(orm_alert)
        return self._to_domain(orm_alert)

    def mark_triggered(self, alert_id: int, triggered_at: datetime) -> Alert:
        orm_alert = self._db.get(AlertORM, alert_id)
        if orm_alert is None:
            raise ValueError(f"Alert not found: {alert_id}")
        orm_alert.triggered_at = triggered_at
        self._db.commit()
        self._db.refresh(orm_alert)
        return self._to_domain(orm_alert)

    def delete(self, alert_id: int) -> None:
        self._db.query(AlertORM).filter(AlertORM.id == alert_id).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: AlertORM) -> Alert:
        """Convert ORM model to domain model."""
        return Alert(
            id=orm.id,
            symbol=orm.symbol,
            condition_type=orm.condition_type,
            threshold=float(orm.threshold),
            is_active=bool(orm.is_active),
            created_at=orm.created_at,
            triggered_at=orm.triggered_at,
        )
