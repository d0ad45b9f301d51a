"""Enumerations for domain models."""

from enum import Enum


class Market(str, Enum):
    """Exchanges a symbol can be traded on."""

    TW = "TW"  # Taiwan, quantities in lots of 1000 shares
    US = "US"


class RebalanceMode(str, Enum):
    """Which side of a rebalance plan to emit."""

    ALL = "all"
    BUY_ONLY = "buy_only"
    SELL_ONLY = "sell_only"


class RebalanceSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class Trend(str, Enum):
    """Technical trend categories, weakest to strongest."""

    STRONG_DOWN = "strong_down"
    DOWN = "down"
    NEUTRAL = "neutral"
    UP = "up"
    STRONG_UP = "strong_up"


class AlertCondition(str, Enum):
    """Conditions an alert can watch for."""

    PRICE_ABOVE = "price_above"
    PRICE_BELOW = "price_below"
    VOLUME_SPIKE = "volume_spike"
    BREAKOUT_HIGH = "breakout_high"
    FOREIGN_BUY_STREAK = "foreign_buy_streak"
    GOLDEN_CROSS = "golden_cross"
    DEATH_CROSS = "death_cross"
