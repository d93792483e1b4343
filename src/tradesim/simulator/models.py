"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from tradesim.portfolio.models import Trade


@dataclass(frozen=True)
class EquityPoint:
    date: date
    value: Decimal


@dataclass(frozen=True)
class PerformanceMetrics:
    total_return_percent: Decimal
    total_return_amount: Decimal
    max_drawdown_percent: Decimal
    sharpe_ratio: Decimal
    winning_trades: int
    losing_trades: int


@dataclass(frozen=True)
class SimulationResult:
    strategy_name: str
    symbol: str
    start_date: date
    end_date: date
    initial_budget: Decimal
    final_budget: Decimal
    metrics: PerformanceMetrics
    data_points_used: int
    execution_time_ms: int
    executed_at: datetime
    trades: tuple[Trade, ...]
    equity_curve: tuple[EquityPoint, ...]

    @property
    def total_trades(self) -> int:
        return len(self.trades)

    @property
    def total_return_percent(self) -> Decimal:
        return self.metrics.total_return_percent

    @property
    def total_return_amount(self) -> Decimal:
        return self.metrics.total_return_amount

    @property
    def max_drawdown_percent(self) -> Decimal:
        return self.metrics.max_drawdown_percent

    @property
    def sharpe_ratio(self) -> Decimal:
        return self.metrics.sharpe_ratio

    @property
    def winning_trades(self) -> int:
        return self.metrics.winning_trades

    @property
    def losing_trades(self) -> int:
        return self.metrics.losing_trades
