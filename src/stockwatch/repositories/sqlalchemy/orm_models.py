"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    Float,
    Text,
    ForeignKey,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from stockwatch.repositories.sqlalchemy.database import Base
from stockwatch.domain.models.enums import Market, AlertCondition


class PortfolioGroupORM(Base):
    """SQLAlchemy model for PortfolioGroup."""

    __tablename__ = "portfolio_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    holdings = relationship(
        "HoldingORM",
        back_populates="group",
        cascade="all, delete-orphan",
    )


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "portfolio"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("portfolio_groups.id"), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)
    shares = Column(Float, nullable=False, default=0.0)
    cost_price = Column(Float, nullable=False, default=0.0)
    target_allocation = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    group = relationship("PortfolioGroupORM", back_populates="holdings")


class WatchlistORM(Base):
    """SQLAlchemy model for WatchlistItem."""

    __tablename__ = "watchlist"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(20), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    market = Column(SqlEnum(Market), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class AlertORM(Base):
    """SQLAlchemy model for Alert."""

    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(20), nullable=False)
    condition_type = Column(SqlEnum(AlertCondition), nullable=False)
    threshold = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    triggered_at = Column(DateTime, nullable=True)
