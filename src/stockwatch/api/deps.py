"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from stockwatch.config.settings import get_settings
from stockwatch.core.cache import TTLCache
from stockwatch.providers import (
    MarketDataProvider,
    StubMarketDataProvider,
    YahooMarketDataProvider,
)
from stockwatch.repositories.sqlalchemy.database import get_db
from stockwatch.repositories.sqlalchemy import (
    SqlAlchemyGroupRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyAlertRepository,
)
from stockwatch.services import (
    MarketDataService,
    PortfolioService,
    WatchlistService,
    AlertService,
    AnalysisService,
)

# Provider and caches outlive a single request
_provider: Optional[MarketDataProvider] = None
_quote_cache: Optional[TTLCache] = None


def get_group_repo(db: Session = Depends(get_db)) -> SqlAlchemyGroupRepository:
    """Provide GroupRepository instance."""
    return SqlAlchemyGroupRepository(db)


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_watchlist_repo(db: Session = Depends(get_db)) -> SqlAlchemyWatchlistRepository:
    """Provide WatchlistRepository instance."""
    return SqlAlchemyWatchlistRepository(db)


def get_alert_repo(db: Session = Depends(get_db)) -> SqlAlchemyAlertRepository:
    """Provide AlertRepository instance."""
    return SqlAlchemyAlertRepository(db)


def get_market_provider() -> MarketDataProvider:
    """Provide the configured MarketDataProvider (Yahoo, or stub for offline use)."""
    global _provider
    if _provider is None:
        settings = get_settings()
        if settings.market_data_provider == "stub":
            _provider = StubMarketDataProvider()
        else:
            _provider = YahooMarketDataProvider(
                ticker_cache=TTLCache(ttl_seconds=settings.ticker_cache_ttl_seconds),
            )
    return _provider


def get_quote_cache() -> TTLCache:
    """Provide the process-wide quote cache."""
    global _quote_cache
    if _quote_cache is None:
        _quote_cache = TTLCache(ttl_seconds=get_settings().quote_cache_ttl_seconds)
    return _quote_cache


def reset_market_state() -> None:
    """Drop the cached provider and quote cache (after a settings change)."""
    global _provider, _quote_cache
    _provider = None
    _quote_cache = None


def get_market_data_service(
    provider: MarketDataProvider = Depends(get_market_provider),
    quote_cache: TTLCache = Depends(get_quote_cache),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    settings = get_settings()
    return MarketDataService(
        provider=provider,
        quote_cache=quote_cache,
        fetch_timeout_seconds=settings.fetch_timeout_seconds,
        max_workers=settings.max_fetch_workers,
    )


def get_portfolio_service(
    group_repo: SqlAlchemyGroupRepository = Depends(get_group_repo),
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        group_repo=group_repo,
        holding_repo=holding_repo,
        market_data_service=market_data_service,
    )


def get_watchlist_service(
    watchlist_repo: SqlAlchemyWatchlistRepository = Depends(get_watchlist_repo),
) -> WatchlistService:
    """Provide WatchlistService instance."""
    return WatchlistService(watchlist_repo=watchlist_repo)


def get_alert_service(
    alert_repo: SqlAlchemyAlertRepository = Depends(get_alert_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> AlertService:
    """Provide AlertService instance."""
    return AlertService(
        alert_repo=alert_repo,
        market_data_service=market_data_service,
        history_days=get_settings().history_days,
    )


def get_analysis_service(
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(
        market_data_service=market_data_service,
        history_days=get_settings().history_days,
    )
