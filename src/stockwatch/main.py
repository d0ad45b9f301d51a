"""FastAPI application: routers, error mapping and startup."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockwatch import __version__
from stockwatch.api.routers import (
    alerts_router,
    portfolio_groups_router,
    portfolio_router,
    quotes_router,
    watchlist_router,
)
from stockwatch.config.logging_config import setup_logging
from stockwatch.config.settings import get_settings
from stockwatch.core.exceptions import AppError
from stockwatch.core.timezone import now_utc
from stockwatch.repositories.sqlalchemy.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info(
        "Stock Watch %s started (market data: %s)",
        __version__,
        get_settings().market_data_provider,
    )
    yield


app = FastAPI(
    title=get_settings().app_name,
    description="Stock watchlist, portfolio rebalancing and technical analysis",
    version=__version__,
    lifespan=lifespan,
)

for router in (
    watchlist_router,
    quotes_router,
    alerts_router,
    portfolio_groups_router,
    portfolio_router,
):
    app.include_router(router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors as ``{"error": code, "message": ...}``."""
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok", "timestamp": now_utc().isoformat()}


@app.get("/")
def root() -> dict[str, str]:
    """API name, version and docs location."""
    return {
        "app": get_settings().app_name,
        "version": __version__,
        "docs": "/docs",
    }
