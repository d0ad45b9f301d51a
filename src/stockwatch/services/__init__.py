"""Service layer - business logic orchestration."""

from stockwatch.services.market_data_service import MarketDataService
from stockwatch.services.portfolio_service import PortfolioService, HoldingCreate, HoldingUpdate
from stockwatch.services.watchlist_service import WatchlistService
from stockwatch.services.alert_service import AlertService, evaluate_alert
from stockwatch.services.analysis_service import AnalysisService
from stockwatch.services.valuation import compute_holding_details
from stockwatch.services.rebalance import compute_rebalance
from stockwatch.services.technicals import IndicatorThresholds, compute_technicals

__all__ = [
    "MarketDataService",
    "PortfolioService",
    "HoldingCreate",
    "HoldingUpdate",
    "WatchlistService",
    "AlertService",
    "evaluate_alert",
    "AnalysisService",
    "compute_holding_details",
    "compute_rebalance",
    "IndicatorThresholds",
    "compute_technicals",
]
