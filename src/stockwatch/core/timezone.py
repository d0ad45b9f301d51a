"""Timezone utilities for the Taipei and New York exchanges."""

from datetime import date, datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

from stockwatch.domain.models.enums import Market

TAIPEI_TZ = pytz.timezone("Asia/Taipei")
EASTERN_TZ = pytz.timezone("US/Eastern")

_MARKET_TZ = {
    Market.TW: TAIPEI_TZ,
    Market.US: EASTERN_TZ,
}


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def market_timezone(market: Market) -> pytz.BaseTzInfo:
    """Return the exchange timezone for a market."""
    return _MARKET_TZ[market]


def now_in_market(market: Market) -> datetime:
    """Return the current time in the market's exchange timezone."""
    return datetime.now(market_timezone(market))


def market_today(market: Market) -> str:
    """Return today's date at the exchange as YYYY-MM-DD."""
    return now_in_market(market).strftime("%Y-%m-%d")


def parse_bar_date(value: Union[str, date, datetime]) -> date:
    """Parse a bar date (ISO string, date or datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()
