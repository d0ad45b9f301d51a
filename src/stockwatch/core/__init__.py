"""Core utilities and shared functionality."""

from stockwatch.core.cache import TTLCache
from stockwatch.core.timezone import (
    now_utc,
    now_in_market,
    market_today,
    parse_bar_date,
    TAIPEI_TZ,
    EASTERN_TZ,
)
from stockwatch.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ConflictError,
    LastGroupError,
    DataUnavailableError,
)

__all__ = [
    "TTLCache",
    "now_utc",
    "now_in_market",
    "market_today",
    "parse_bar_date",
    "TAIPEI_TZ",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "LastGroupError",
    "DataUnavailableError",
]
