"""Strategy lookup by configured name."""

from __future__ import annotations

from typing import Callable

from tradesim.config.models import StrategyConfig
from tradesim.strategy.base import TradingStrategy
from tradesim.strategy.buy_and_hold import build_buy_and_hold_from_config
from tradesim.strategy.moving_average import build_moving_average_cross_from_config

STRATEGY_BUILDERS: dict[str, Callable[[dict], TradingStrategy]] = {
    "buy_and_hold": build_buy_and_hold_from_config,
    "moving_average_cross": build_moving_average_cross_from_config,
}


def build_strategy(config: StrategyConfig) -> TradingStrategy:
    builder = STRATEGY_BUILDERS.get(config.name)
    if builder is None:
        raise ValueError(f"Unknown strategy: {config.name} (known: {sorted(STRATEGY_BUILDERS)})")
    return builder(dict(config.parameters))
