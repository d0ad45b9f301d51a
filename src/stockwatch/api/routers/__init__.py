"""API routers package."""

from stockwatch.api.routers.watchlist import router as watchlist_router
from stockwatch.api.routers.quotes import router as quotes_router
from stockwatch.api.routers.alerts import router as alerts_router
from stockwatch.api.routers.portfolio import router as portfolio_router
from stockwatch.api.routers.portfolio_groups import router as portfolio_groups_router

__all__ = [
    "watchlist_router",
    "quotes_router",
    "alerts_router",
    "portfolio_router",
    "portfolio_groups_router",
]
