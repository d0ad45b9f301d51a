"""Pydantic schemas for quote, history and analysis endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from stockwatch.domain.models.enums import Market, Trend


class PriceBarResponse(BaseModel):
    """One OHLCV bar."""

    model_config = {"from_attributes": True}

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: float


class QuoteResponse(PriceBarResponse):
    """Response schema for a live quote."""

    symbol: str
    previous_close: float
    change: float
    change_percent: float
    is_market_closed: bool


class ExchangeRateResponse(BaseModel):
    rate: float
    updated_at: datetime


class TechnicalsResponse(BaseModel):
    """Response schema for a technical snapshot."""

    model_config = {"from_attributes": True}

    ma5: float
    ma20: float
    ma60: float
    rsi14: float
    volume_ratio: float
    week52_high: float
    week52_low: float
    week52_position: float
    trend: Trend
    signals: list[str]
    analysis: str
    golden_cross: bool = False
    death_cross: bool = False


class SummaryResponse(BaseModel):
    """Quote, technicals and plain-text summary for one symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    market: Market
    quote: QuoteResponse
    technicals: TechnicalsResponse
    summary_text: str
    history_length: int = 0
    as_of: Optional[str] = None
