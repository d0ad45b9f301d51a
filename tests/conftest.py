"""
Pytest configuration and fixtures for stock watch tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and slow market data providers
- Price history builders
- Service and repository fixtures
- FastAPI test client wired to the test database and provider
"""

import threading
from datetime import date, timedelta
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from stockwatch.main import app
from stockwatch.api.deps import get_market_provider, get_quote_cache, reset_market_state
from stockwatch.config.settings import Settings, set_settings, reset_settings
from stockwatch.core.cache import TTLCache
from stockwatch.repositories.sqlalchemy.database import (
    Base,
    get_db,
    ensure_default_group,
    reset_database,
)
# Import ORM models to register them with Base before creating tables
from stockwatch.repositories.sqlalchemy import orm_models  # noqa: F401
from stockwatch.repositories.sqlalchemy import (
    SqlAlchemyGroupRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyAlertRepository,
)
from stockwatch.domain.models import Market, PriceBar, Quote
from stockwatch.services import (
    MarketDataService,
    PortfolioService,
    WatchlistService,
    AlertService,
    AnalysisService,
)


# =============================================================================
# PRICE HISTORY HELPERS
# =============================================================================


def make_bars(
    closes: list[float],
    volumes: Optional[list[float]] = None,
    start: date = date(2024, 1, 1),
) -> list[PriceBar]:
    """Build a daily, date-ascending history from closes (and optional volumes)."""
    bars = []
    for i, close in enumerate(closes):
        bars.append(
            PriceBar(
                date=(start + timedelta(days=i)).isoformat(),
                open=close,
                high=close * 1.01,
                low=close * 0.99,
                close=close,
                volume=volumes[i] if volumes else 1000.0,
            )
        )
    return bars


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Quotes come from a mutable (last_price, prev_close) table and histories
    from a mutable symbol -> bars table, so tests can shape both.
    """

    FIXED_QUOTES = {
        "AAPL": (185.50, 184.25),  # +1.25 / +0.68%
        "MSFT": (378.25, 376.80),  # +1.45 / +0.38%
        "TSLA": (248.75, 250.10),  # -1.35 / -0.54% (down)
        "2330": (585.00, 580.00),
        "USDTWD=X": (31.85, 31.80),
    }

    def __init__(self):
        self.quotes: dict[str, tuple[float, float]] = dict(self.FIXED_QUOTES)
        self.histories: dict[str, list[PriceBar]] = {}
        self.quote_calls: list[tuple[str, Market]] = []
        self.history_calls: list[tuple[str, Market, int, str]] = []

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        self.quote_calls.append((symbol, market))
        prices = self.quotes.get(symbol.upper())
        if prices is None:
            return None
        last_price, prev_close = prices
        bar = PriceBar(
            date="2024-06-14",
            open=prev_close,
            high=max(last_price, prev_close),
            low=min(last_price, prev_close),
            close=last_price,
            volume=1_000_000.0,
        )
        return Quote.from_bar(symbol.upper(), bar, previous_close=prev_close)

    def get_history(
        self,
        symbol: str,
        market: Market,
        days: int = 30,
        interval: str = "1d",
    ) -> list[PriceBar]:
        self.history_calls.append((symbol, market, days, interval))
        return list(self.histories.get(symbol.upper(), []))


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        raise ConnectionError("Network unavailable")

    def get_history(self, symbol, market, days=30, interval="1d") -> list[PriceBar]:
        raise ConnectionError("Network unavailable")


class SlowMarketProvider(DeterministicMarketProvider):
    """Deterministic provider whose quotes and histories for some symbols block until released."""

    def __init__(self, *slow_symbols: str):
        super().__init__()
        self.slow_symbols = set(slow_symbols or ("SLOW",))
        self.release = threading.Event()

    def get_quote(self, symbol: str, market: Market) -> Optional[Quote]:
        if symbol.upper() in self.slow_symbols:
            self.release.wait(timeout=5)
            return None
        return super().get_quote(symbol, market)

    def get_history(self, symbol, market, days=30, interval="1d") -> list[PriceBar]:
        if symbol.upper() in self.slow_symbols:
            self.release.wait(timeout=5)
            return []
        return super().get_history(symbol, market, days, interval)


@pytest.fixture
def market_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session with the default group seeded."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    ensure_default_group(session)
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def group_repo(test_session) -> SqlAlchemyGroupRepository:
    return SqlAlchemyGroupRepository(test_session)


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def watchlist_repo(test_session) -> SqlAlchemyWatchlistRepository:
    return SqlAlchemyWatchlistRepository(test_session)


@pytest.fixture
def alert_repo(test_session) -> SqlAlchemyAlertRepository:
    return SqlAlchemyAlertRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(market_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=market_provider,
        quote_cache=TTLCache(ttl_seconds=60),
        fetch_timeout_seconds=2.0,
    )


@pytest.fixture
def portfolio_service(group_repo, holding_repo, market_data_service) -> PortfolioService:
    return PortfolioService(
        group_repo=group_repo,
        holding_repo=holding_repo,
        market_data_service=market_data_service,
    )


@pytest.fixture
def watchlist_service(watchlist_repo) -> WatchlistService:
    return WatchlistService(watchlist_repo=watchlist_repo)


@pytest.fixture
def alert_service(alert_repo, market_data_service) -> AlertService:
    return AlertService(alert_repo=alert_repo, market_data_service=market_data_service)


@pytest.fixture
def analysis_service(market_data_service) -> AnalysisService:
    return AnalysisService(market_data_service=market_data_service)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, market_provider, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database and deterministic provider."""
    # Startup writes go to a throwaway data dir
    set_settings(Settings(data_dir=tmp_path, market_data_provider="stub"))
    reset_database()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    seed = TestSessionLocal()
    ensure_default_group(seed)
    seed.close()

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    quote_cache = TTLCache(ttl_seconds=60)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_provider] = lambda: market_provider
    app.dependency_overrides[get_quote_cache] = lambda: quote_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_market_state()
    reset_settings()
