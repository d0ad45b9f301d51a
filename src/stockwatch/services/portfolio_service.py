"""Portfolio service: groups, holdings, valuation and rebalancing."""

import logging
from dataclasses import dataclass
from typing import Optional

from stockwatch.core.exceptions import LastGroupError, NotFoundError, ValidationError
from stockwatch.domain.market import classify_market
from stockwatch.domain.models import Holding, PortfolioGroup, RebalanceMode
from stockwatch.domain.views import PortfolioValuation, RebalancePlan
from stockwatch.repositories.protocols import GroupRepository, HoldingRepository
from stockwatch.services.market_data_service import MarketDataService
from stockwatch.services.rebalance import compute_rebalance
from stockwatch.services.valuation import compute_holding_details

logger = logging.getLogger(__name__)


@dataclass
class HoldingCreate:
    """Input data for adding a holding to a group."""

    group_id: int
    symbol: str
    name: str
    shares: float
    cost_price: float
    target_allocation: float = 0.0


@dataclass
class HoldingUpdate:
    """Replacement values for a holding's position fields."""

    shares: float
    cost_price: float
    target_allocation: float = 0.0


class PortfolioService:
    """
    Service for portfolio groups and their holdings.

    Stored holdings are the source of truth; valuation and rebalance plans
    are derived per call from them plus live quotes.
    """

    def __init__(
        self,
        group_repo: GroupRepository,
        holding_repo: HoldingRepository,
        market_data_service: MarketDataService,
    ):
        self._group_repo = group_repo
        self._holding_repo = holding_repo
        self._market = market_data_service

    # Groups

    def list_groups(self) -> list[PortfolioGroup]:
        return self._group_repo.list_all()

    def get_group(self, group_id: int) -> PortfolioGroup:
        group = self._group_repo.get_by_id(group_id)
        if not group:
            raise NotFoundError("Portfolio group", str(group_id))
        return group

    def create_group(self, name: str, description: str = "") -> PortfolioGroup:
        """Create a named group; the name is trimmed and required."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        group = PortfolioGroup(id=None, name=name, description=(description or "").strip())
        return self._group_repo.create(group)

    def update_group(self, group_id: int, name: str, description: str = "") -> PortfolioGroup:
        group = self.get_group(group_id)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        group.name = name
        group.description = (description or "").strip()
        return self._group_repo.update(group)

    def delete_group(self, group_id: int) -> None:
        """Delete a group and its holdings. The last remaining group is kept."""
        self.get_group(group_id)
        if self._group_repo.count() <= 1:
            raise LastGroupError()
        self._group_repo.delete(group_id)
        logger.info("Deleted portfolio group %s", group_id)

    # Holdings

    def list_holdings(self, group_id: Optional[int] = None) -> list[Holding]:
        return self._holding_repo.list_by_group(group_id)

    def get_holding(self, holding_id: int) -> Holding:
        holding = self._holding_repo.get_by_id(holding_id)
        if not holding:
            raise NotFoundError("Holding", str(holding_id))
        return holding

    def add_holding(self, data: HoldingCreate) -> Holding:
        """Add a holding to an existing group."""
        symbol = (data.symbol or "").strip().upper()
        name = (data.name or "").strip()
        if not symbol or not name:
            raise ValidationError("Symbol and name are required")
        self._validate_position(data.shares, data.cost_price, data.target_allocation)
        self.get_group(data.group_id)

        holding = Holding(
            id=None,
            group_id=data.group_id,
            symbol=symbol,
            name=name,
            shares=data.shares,
            cost_price=data.cost_price,
            target_allocation=data.target_allocation,
        )
        return self._holding_repo.create(holding)

    def update_holding(self, holding_id: int, data: HoldingUpdate) -> Holding:
        holding = self.get_holding(holding_id)
        self._validate_position(data.shares, data.cost_price, data.target_allocation)
        holding.shares = data.shares
        holding.cost_price = data.cost_price
        holding.target_allocation = data.target_allocation
        return self._holding_repo.update(holding)

    def delete_holding(self, holding_id: int) -> None:
        self.get_holding(holding_id)
        self._holding_repo.delete(holding_id)

    # Derived views

    def get_details(self, group_id: int) -> PortfolioValuation:
        """
        Value every holding in a group at current prices.

        Quotes are fetched concurrently; a symbol with no quote is valued at
        its cost price.
        """
        self.get_group(group_id)
        holdings = self._holding_repo.list_by_group(group_id)
        quotes = self._market.get_quotes(
            [(h.symbol, classify_market(h.symbol)) for h in holdings]
        )
        prices = {symbol: quote.close for symbol, quote in quotes.items()}
        missing = {h.symbol for h in holdings} - prices.keys()
        if missing:
            logger.info("No live price for %s, valuing at cost", ", ".join(sorted(missing)))
        return compute_holding_details(holdings, prices)

    def get_rebalance(
        self,
        group_id: int,
        mode: RebalanceMode = RebalanceMode.ALL,
    ) -> RebalancePlan:
        valuation = self.get_details(group_id)
        mode = RebalanceMode(mode)
        actions = compute_rebalance(valuation.details, valuation.total_market_value, mode)
        return RebalancePlan(
            actions=actions,
            total_market_value=valuation.total_market_value,
            mode=mode,
        )

    @staticmethod
    def _validate_position(shares: float, cost_price: float, target_allocation: float) -> None:
        if shares is None or shares < 0:
            raise ValidationError("Shares must be zero or positive")
        if cost_price is None or cost_price < 0:
            raise ValidationError("Cost price must be zero or positive")
        if target_allocation is None or not 0 <= target_allocation <= 100:
            raise ValidationError("Target allocation must be between 0 and 100")
