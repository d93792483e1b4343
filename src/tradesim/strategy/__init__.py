"""Strategy implementations."""

from tradesim.strategy.base import TradingStrategy
from tradesim.strategy.buy_and_hold import BuyAndHoldStrategy, build_buy_and_hold_from_config
from tradesim.strategy.indicators import IndicatorSeries
from tradesim.strategy.moving_average import (
    MovingAverageCrossParams,
    MovingAverageCrossStrategy,
    build_moving_average_cross_from_config,
)
from tradesim.strategy.registry import STRATEGY_BUILDERS, build_strategy
from tradesim.strategy.sizing import affordable_shares

__all__ = [
    "BuyAndHoldStrategy",
    "IndicatorSeries",
    "MovingAverageCrossParams",
    "MovingAverageCrossStrategy",
    "STRATEGY_BUILDERS",
    "TradingStrategy",
    "affordable_shares",
    "build_buy_and_hold_from_config",
    "build_moving_average_cross_from_config",
    "build_strategy",
]
