"""View models for service outputs."""

from stockwatch.domain.views.portfolio import (
    HoldingDetail,
    PortfolioValuation,
    RebalanceAction,
    RebalancePlan,
)
from stockwatch.domain.views.analysis import TechnicalSnapshot, StockSummary

__all__ = [
    "HoldingDetail",
    "PortfolioValuation",
    "RebalanceAction",
    "RebalancePlan",
    "TechnicalSnapshot",
    "StockSummary",
]
