"""Simulation engine and performance metrics."""

from tradesim.simulator.engine import SimulationEngine
from tradesim.simulator.metrics import (
    classify_trades,
    compute_metrics,
    max_drawdown_percent,
    sharpe_ratio,
    total_return,
)
from tradesim.simulator.models import EquityPoint, PerformanceMetrics, SimulationResult

__all__ = [
    "EquityPoint",
    "PerformanceMetrics",
    "SimulationEngine",
    "SimulationResult",
    "classify_trades",
    "compute_metrics",
    "max_drawdown_percent",
    "sharpe_ratio",
    "total_return",
]
