"""SQLAlchemy implementations of the portfolio group and holding repositories."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from stockwatch.domain.models import PortfolioGroup, Holding
from stockwatch.repositories.sqlalchemy.orm_models import PortfolioGroupORM, HoldingORM


class SqlAlchemyGroupRepository:
    """SQLAlchemy-backed portfolio group repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, group: PortfolioGroup) -> PortfolioGroup:
        """Persist a new group."""
        orm_group = PortfolioGroupORM(
            name=group.name,
            description=group.description,
        )
        self._db.add(orm_group)
        self._db.commit()
        self._db.refresh(orm_group)
        return self._to_domain(orm_group)

    def get_by_id(self, group_id: int) -> Optional[PortfolioGroup]:
        """Retrieve group by ID."""
        orm_group = self._db.get(PortfolioGroupORM, group_id)
        return self._to_domain(orm_group) if orm_group else None

    def list_all(self) -> list[PortfolioGroup]:
        """List all groups, oldest first."""
        orm_groups = (
            self._db.query(PortfolioGroupORM)
            .order_by(PortfolioGroupORM.created_at, PortfolioGroupORM.id)
            .all()
        )
        return [self._to_domain(g) for g in orm_groups]

    def count(self) -> int:
        return self._db.query(PortfolioGroupORM).count()

    def update(self, group: PortfolioGroup) -> PortfolioGroup:
        """Update an existing group's name and description."""
        orm_group = self._db.get(PortfolioGroupORM, group.id)
        if orm_group is None:
            raise ValueError(f"Portfolio group not found: {group.id}")
        orm_group.name = group.name
        orm_group.description = group.description
        self._db.commit()
        self._db.refresh(orm_group)
        return self._to_domain(orm_group)

    def delete(self, group_id: int) -> None:
        """Delete a group together with its holdings."""
        orm_group = self._db.get(PortfolioGroupORM, group_id)
        if orm_group is not None:
            self._db.delete(orm_group)
            self._db.commit()

    @staticmethod
    def _to_domain(orm: PortfolioGroupORM) -> PortfolioGroup:
        """Convert ORM model to domain model."""
        return PortfolioGroup(
            id=orm.id,
            name=orm.name,
            description=orm.description or "",
            created_at=orm.created_at,
        )


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        orm_holding = HoldingORM(
            group_id=holding.group_id,
            symbol=holding.symbol,
            name=holding.name,
            shares=holding.shares,
            cost_price=holding.cost_price,
            target_allocation=holding.target_allocation,
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        """Retrieve holding by ID."""
        orm_holding = self._db.get(HoldingORM, holding_id)
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_group(self, group_id: Optional[int] = None) -> list[Holding]:
        """List holdings ordered by symbol, optionally for one group."""
        query = self._db.query(HoldingORM)
        if group_id is not None:
            query = query.filter(HoldingORM.group_id == group_id)
        query = query.order_by(HoldingORM.symbol, HoldingORM.id)
        return [self._to_domain(h) for h in query.all()]

    def update(self, holding: Holding) -> Holding:
        """Update shares, cost price and target allocation."""
        orm_holding = self._db.get(HoldingORM, holding.id)
        if orm_holding is None:
            raise ValueError(f"Holding not found: {holding.id}")
        orm_holding.shares = holding.shares
        orm_holding.cost_price = holding.cost_price
        orm_holding.target_allocation = holding.target_allocation
        orm_holding.updated_at = datetime.utcnow()
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def delete(self, holding_id: int) -> None:
        """Delete a holding."""
        self._db.query(HoldingORM).filter(HoldingORM.id == holding_id).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            id=orm.id,
            group_id=orm.group_id,
            symbol=orm.symbol,
            name=orm.name,
            shares=float(orm.shares or 0),
            cost_price=float(orm.cost_price or 0),
            target_allocation=float(orm.target_allocation or 0),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
