"""View models for technical analysis outputs."""

from dataclasses import dataclass, field
from typing import Optional

from stockwatch.domain.models import Market, Quote, Trend


@dataclass
class TechnicalSnapshot:
    """Indicators derived from a price history and a current price."""

    ma5: float
    ma20: float
    ma60: float
    rsi14: float
    volume_ratio: float
    week52_high: float
    week52_low: float
    week52_position: float
    trend: Trend
    signals: list[str] = field(default_factory=list)
    analysis: str = ""
    golden_cross: bool = False
    death_cross: bool = False


@dataclass
class StockSummary:
    """Quote plus technicals plus a short plain-text verdict."""

    symbol: str
    market: Market
    quote: Quote
    technicals: TechnicalSnapshot
    summary_text: str
    history_length: int = 0
    as_of: Optional[str] = None
