"""Watchlist endpoints."""

from fastapi import APIRouter, Depends

from stockwatch.api.deps import get_watchlist_service
from stockwatch.api.schemas import WatchlistCreate, WatchlistItemResponse, WatchlistUpdate
from stockwatch.services import WatchlistService

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistItemResponse])
def list_watchlist(
    service: WatchlistService = Depends(get_watchlist_service),
) -> list[WatchlistItemResponse]:
    """List followed symbols, newest first."""
    return [WatchlistItemResponse.model_validate(item) for item in service.list_items()]


@router.post("", response_model=WatchlistItemResponse, status_code=201)
def add_to_watchlist(
    data: WatchlistCreate,
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistItemResponse:
    item = service.add_item(data.symbol, data.name, data.market)
    return WatchlistItemResponse.model_validate(item)


@router.patch("/{symbol}", response_model=WatchlistItemResponse)
def update_watchlist_item(
    symbol: str,
    data: WatchlistUpdate,
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistItemResponse:
    item = service.update_item(symbol, name=data.name, market=data.market)
    return WatchlistItemResponse.model_validate(item)


@router.delete("/{symbol}", status_code=204)
def remove_from_watchlist(
    symbol: str,
    service: WatchlistService = Depends(get_watchlist_service),
) -> None:
    service.remove_item(symbol)
