"""Portfolio group and holding repository protocols."""

from typing import Protocol, Optional

from stockwatch.domain.models import PortfolioGroup, Holding


class GroupRepository(Protocol):
    """Interface for portfolio group data access."""

    def create(self, group: PortfolioGroup) -> PortfolioGroup:
        """Persist a new group."""
        ...

    def get_by_id(self, group_id: int) -> Optional[PortfolioGroup]:
        """Retrieve group by ID."""
        ...

    def list_all(self) -> list[PortfolioGroup]:
        """List all groups."""
        ...

    def count(self) -> int:
        ...

    def update(self, group: PortfolioGroup) -> PortfolioGroup:
        """Update an existing group."""
        ...

    def delete(self, group_id: int) -> None:
        """Delete a group and every holding in it."""
        ...


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def create(self, holding: Holding) -> Holding:
        ...

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        ...

    def list_by_group(self, group_id: Optional[int] = None) -> list[Holding]:
        """List holdings, optionally restricted to one group."""
        ...

    def update(self, holding: Holding) -> Holding:
        ...

    def delete(self, holding_id: int) -> None:
        ...
