"""Moving-average crossover strategy (long only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from tradesim.market.models import PriceBar
from tradesim.portfolio.models import Portfolio, Trade, TradeAction
from tradesim.strategy.indicators import IndicatorSeries
from tradesim.strategy.sizing import affordable_shares


@dataclass(frozen=True)
class MovingAverageCrossParams:
    fast_window: int = 10
    slow_window: int = 30

    def __post_init__(self) -> None:
        if self.fast_window <= 0:
            raise ValueError("fast_window must be positive")
        if self.fast_window >= self.slow_window:
            raise ValueError("fast_window must be smaller than slow_window")

    @staticmethod
    def from_dict(data: dict) -> "MovingAverageCrossParams":
        unknown = set(data) - {"fast_window", "slow_window"}
        if unknown:
            raise ValueError(f"Unknown moving_average_cross parameters: {sorted(unknown)}")
        return MovingAverageCrossParams(
            fast_window=int(data.get("fast_window", 10)),
            slow_window=int(data.get("slow_window", 30)),
        )


class MovingAverageCrossStrategy:
    """Buy when the fast SMA crosses above the slow SMA, sell on the reverse cross."""

    def __init__(self, params: MovingAverageCrossParams) -> None:
        self.params = params
        self.name = f"MA Cross {params.fast_window}/{params.slow_window}"
        self.crossings = 0

    def initialize(self) -> None:
        self.crossings = 0

    def _cross(self, history: Sequence[PriceBar]) -> int:
        series = IndicatorSeries.from_bars(history)
        fast = series.sma(self.params.fast_window)
        slow = series.sma(self.params.slow_window)
        prev_fast = series.sma(self.params.fast_window, offset=1)
        prev_slow = series.sma(self.params.slow_window, offset=1)
        if fast is None or slow is None or prev_fast is None or prev_slow is None:
            return 0
        if prev_fast <= prev_slow and fast > slow:
            return 1
        if prev_fast >= prev_slow and fast < slow:
            return -1
        return 0

    def decide(
        self,
        bar: PriceBar,
        portfolio: Portfolio,
        history: Sequence[PriceBar],
    ) -> Optional[Trade]:
        direction = self._cross(history)
        if direction == 0:
            return None
        self.crossings += 1

        if direction > 0 and not portfolio.has_position(bar.symbol):
            shares = affordable_shares(portfolio.cash, bar.close)
            if shares <= 0:
                return None
            return Trade(
                date=bar.date,
                action=TradeAction.BUY,
                symbol=bar.symbol,
                shares=shares,
                price=bar.close,
                note="fast SMA crossed above slow SMA",
            )
        if direction < 0 and portfolio.has_position(bar.symbol):
            return Trade(
                date=bar.date,
                action=TradeAction.SELL,
                symbol=bar.symbol,
                shares=portfolio.shares_of(bar.symbol),
                price=bar.close,
                note="fast SMA crossed below slow SMA",
            )
        return None

    def finalize(self) -> None:
        return None


def build_moving_average_cross_from_config(parameters: dict) -> MovingAverageCrossStrategy:
    return MovingAverageCrossStrategy(MovingAverageCrossParams.from_dict(parameters))
