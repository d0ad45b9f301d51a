"""Quote, history and per-symbol analysis endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from stockwatch.api.deps import get_analysis_service, get_market_data_service
from stockwatch.api.schemas import (
    ExchangeRateResponse,
    PriceBarResponse,
    QuoteResponse,
    SummaryResponse,
    TechnicalsResponse,
)
from stockwatch.core.exceptions import DataUnavailableError, NotFoundError
from stockwatch.core.timezone import now_utc
from stockwatch.domain.market import classify_market
from stockwatch.domain.models import Market
from stockwatch.providers.market_data_provider import DEFAULT_INTERVAL
from stockwatch.services import AnalysisService, MarketDataService

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


def _resolve(symbol: str, market: Optional[Market]) -> tuple[str, Market]:
    symbol = symbol.strip().upper()
    return symbol, market or classify_market(symbol)


# Registered before /{symbol} so it is not captured as a symbol
@router.get("/exchange-rate", response_model=ExchangeRateResponse)
def get_exchange_rate(
    market_data: MarketDataService = Depends(get_market_data_service),
) -> ExchangeRateResponse:
    """Current USD/TWD rate."""
    rate = market_data.get_exchange_rate()
    if rate is None:
        raise DataUnavailableError("Exchange rate is unavailable")
    return ExchangeRateResponse(rate=rate, updated_at=now_utc())


@router.get("/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    market: Optional[Market] = Query(None, description="TW or US; inferred from the symbol if omitted"),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    symbol, market = _resolve(symbol, market)
    quote = market_data.get_quote(symbol, market)
    if quote is None:
        raise NotFoundError("Quote", symbol)
    return QuoteResponse.model_validate(quote)


@router.get("/{symbol}/history", response_model=list[PriceBarResponse])
def get_history(
    symbol: str,
    market: Optional[Market] = Query(None),
    days: int = Query(365, ge=1, le=3650),
    interval: str = Query(DEFAULT_INTERVAL, description="1m 5m 15m 30m 60m 1d 1wk 1mo 1y"),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> list[PriceBarResponse]:
    """Date-ascending bars; unsupported intervals fall back to daily."""
    symbol, market = _resolve(symbol, market)
    bars = market_data.get_history(symbol, market, days=days, interval=interval)
    return [PriceBarResponse.model_validate(bar) for bar in bars]


@router.get("/{symbol}/technicals", response_model=TechnicalsResponse)
def get_technicals(
    symbol: str,
    market: Optional[Market] = Query(None),
    days: int = Query(365, ge=1, le=3650),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> TechnicalsResponse:
    symbol, market = _resolve(symbol, market)
    return TechnicalsResponse.model_validate(analysis.get_technicals(symbol, market, days))


@router.get("/{symbol}/summary", response_model=SummaryResponse)
def get_summary(
    symbol: str,
    market: Optional[Market] = Query(None),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> SummaryResponse:
    """Quote, technicals and a short verdict for one symbol."""
    symbol, market = _resolve(symbol, market)
    return SummaryResponse.model_validate(analysis.get_summary(symbol, market))
