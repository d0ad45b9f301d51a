"""SQLAlchemy repository implementations."""

from stockwatch.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    init_db_with_path,
    ensure_default_group,
    reset_database,
    session_scope,
    Base,
    DEFAULT_GROUP_ID,
)
from stockwatch.repositories.sqlalchemy.portfolio_repo import (
    SqlAlchemyGroupRepository,
    SqlAlchemyHoldingRepository,
)
from stockwatch.repositories.sqlalchemy.watchlist_repo import (
    SqlAlchemyWatchlistRepository,
    SqlAlchemyAlertRepository,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "init_db_with_path",
    "ensure_default_group",
    "reset_database",
    "session_scope",
    "Base",
    "DEFAULT_GROUP_ID",
    "SqlAlchemyGroupRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyAlertRepository",
]
