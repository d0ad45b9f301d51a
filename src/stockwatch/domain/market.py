"""Market classification for symbols."""

import re

from stockwatch.domain.models.enums import Market

_TW_SYMBOL = re.compile(r"^\d+$")

_UNIT_SIZE = {
    Market.TW: 1000,
    Market.US: 1,
}

_UNIT_LABEL = {
    Market.TW: "lot",
    Market.US: "share",
}


def classify_market(symbol: str) -> Market:
    """All-digit symbols trade in Taiwan; everything else is treated as US."""
    return Market.TW if _TW_SYMBOL.match(symbol) else Market.US


def unit_size(market: Market) -> int:
    """Underlying shares per quoted unit (a TW lot is 1000 shares)."""
    return _UNIT_SIZE[market]


def unit_label(market: Market) -> str:
    return _UNIT_LABEL[market]
