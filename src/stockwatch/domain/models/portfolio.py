"""Portfolio group and holding domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class PortfolioGroup:
    """
    Named container of holdings.

    At least one group always exists; the last one cannot be deleted.
    """

    id: Optional[int]
    name: str
    description: str = ""
    created_at: Optional[datetime] = field(default=None)


@dataclass
class Holding:
    """
    A position owned by exactly one portfolio group.

    ``shares`` is in lots for TW symbols and in shares for US symbols.
    ``target_allocation`` is a percentage of the group's market value.
    """

    id: Optional[int]
    group_id: int
    symbol: str
    name: str
    shares: float
    cost_price: float
    target_allocation: float = 0.0
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
