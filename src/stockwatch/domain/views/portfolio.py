"""View models for portfolio valuation and rebalancing outputs."""

from dataclasses import dataclass, field

from stockwatch.domain.models import Holding, RebalanceMode, RebalanceSide


@dataclass
class HoldingDetail:
    """Holding enriched with live valuation. Derived, never stored."""

    holding: Holding
    current_price: float
    market_value: float
    profit_loss: float
    profit_loss_percent: float
    current_allocation: float = 0.0
    allocation_diff: float = 0.0

    @property
    def symbol(self) -> str:
        return self.holding.symbol

    @property
    def name(self) -> str:
        return self.holding.name

    @property
    def target_allocation(self) -> float:
        return self.holding.target_allocation


@dataclass
class PortfolioValuation:
    """Holding details for one group plus their total market value."""

    details: list[HoldingDetail] = field(default_factory=list)
    total_market_value: float = 0.0


@dataclass
class RebalanceAction:
    """A single buy or sell recommendation."""

    symbol: str
    name: str
    action: RebalanceSide
    shares: float
    amount: float
    reason: str


@dataclass
class RebalancePlan:
    """Rebalance actions for one group under one mode."""

    actions: list[RebalanceAction] = field(default_factory=list)
    total_market_value: float = 0.0
    mode: RebalanceMode = RebalanceMode.ALL
