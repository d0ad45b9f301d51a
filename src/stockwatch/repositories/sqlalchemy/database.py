"""
SQLite engine, sessions and schema bootstrap.

The engine is bound lazily to the URL from settings and can be rebound to
another database file with ``init_db_with_path``. Every connection runs with
foreign keys enforced.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from stockwatch.config.settings import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_GROUP_ID = 1
DEFAULT_GROUP_NAME = "My First Portfolio"
DEFAULT_GROUP_DESCRIPTION = "Default portfolio"

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _bind(database_url: str) -> Engine:
    """Point the module engine and session factory at ``database_url``."""
    global _engine, _SessionLocal

    reset_database()
    engine = create_engine(database_url, connect_args={"check_same_thread": False})
    event.listen(engine, "connect", _set_sqlite_pragma)
    _engine = engine
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.debug("Database bound to %s", database_url)
    return engine


def get_engine() -> Engine:
    if _engine is None:
        return _bind(get_settings().get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    if _SessionLocal is None:
        get_engine()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Session for work outside a request; commits on success, rolls back on error."""
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def ensure_default_group(db: Session) -> None:
    """Insert the default portfolio group when the table is empty."""
    from stockwatch.repositories.sqlalchemy.orm_models import PortfolioGroupORM

    if db.query(PortfolioGroupORM).first() is not None:
        return
    db.add(
        PortfolioGroupORM(
            id=DEFAULT_GROUP_ID,
            name=DEFAULT_GROUP_NAME,
            description=DEFAULT_GROUP_DESCRIPTION,
        )
    )
    db.commit()
    logger.info("Created default portfolio group")


def init_db() -> None:
    """Create missing tables and seed the default group."""
    from stockwatch.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    with session_scope() as db:
        ensure_default_group(db)


def init_db_with_path(db_path: Path) -> None:
    """Rebind to the SQLite file at ``db_path`` and initialise it."""
    _bind(f"sqlite:///{db_path}")
    init_db()


def reset_database() -> None:
    """Dispose of the current engine; the next access rebinds from settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
