"""Simulation observers invoked by the engine at fixed points of a run."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Protocol, Sequence

from tradesim.monitoring.audit import AuditLog
from tradesim.monitoring.notifier import Notifier

if TYPE_CHECKING:
    from tradesim.market.models import PriceBar
    from tradesim.portfolio.models import Portfolio, Trade
    from tradesim.simulator.models import SimulationResult

CENTS = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


class SimulationObserver(Protocol):
    def on_run_start(self, strategy_name: str, symbol: str, initial_budget: Decimal, bars: Sequence[PriceBar]) -> None:
        ...

    def on_trade(self, trade: Trade, portfolio: Portfolio) -> None:
        ...

    def on_run_end(self, result: SimulationResult) -> None:
        ...

    def on_run_failed(self, strategy_name: str, symbol: str, error: Exception) -> None:
        ...


class NullObserver:
    def on_run_start(self, strategy_name, symbol, initial_budget, bars) -> None:
        return None

    def on_trade(self, trade, portfolio) -> None:
        return None

    def on_run_end(self, result) -> None:
        return None

    def on_run_failed(self, strategy_name, symbol, error) -> None:
        return None


@dataclass
class NotifierObserver:
    notifier: Notifier

    def on_run_start(self, strategy_name, symbol, initial_budget, bars) -> None:
        self.notifier.notify(
            "RUN_START",
            f"{strategy_name} on {symbol} budget {_money(initial_budget)} "
            f"{bars[0].date} to {bars[-1].date} ({len(bars)} bars)",
        )

    def on_trade(self, trade, portfolio) -> None:
        self.notifier.notify(
            trade.action.value,
            f"{trade.date} {trade.symbol} shares {_money(trade.shares)} "
            f"price {_money(trade.price)} total {_money(trade.notional)}",
        )

    def on_run_end(self, result) -> None:
        self.notifier.notify(
            "RUN_END",
            f"final value {_money(result.final_budget)} return {_money(result.total_return_percent)}% "
            f"trades {result.total_trades} in {result.execution_time_ms}ms",
        )

    def on_run_failed(self, strategy_name, symbol, error) -> None:
        self.notifier.notify("RUN_FAILED", f"{strategy_name} on {symbol}: {error}")


@dataclass
class AuditObserver:
    audit_log: AuditLog

    def on_run_start(self, strategy_name, symbol, initial_budget, bars) -> None:
        self.audit_log.log(
            "run_start",
            {
                "strategy": strategy_name,
                "symbol": symbol,
                "initial_budget": str(initial_budget),
                "start_date": bars[0].date.isoformat(),
                "end_date": bars[-1].date.isoformat(),
                "data_points": len(bars),
            },
        )

    def on_trade(self, trade, portfolio) -> None:
        self.audit_log.log(
            "trade",
            {
                "date": trade.date.isoformat(),
                "action": trade.action.value,
                "symbol": trade.symbol,
                "shares": str(trade.shares),
                "price": str(trade.price),
                "cash_after": str(portfolio.cash),
                "note": trade.note,
            },
        )

    def on_run_end(self, result) -> None:
        self.audit_log.log(
            "run_end",
            {
                "final_budget": str(result.final_budget),
                "total_return_percent": str(result.total_return_percent),
                "max_drawdown_percent": str(result.max_drawdown_percent),
                "sharpe_ratio": str(result.sharpe_ratio),
                "total_trades": result.total_trades,
                "execution_time_ms": result.execution_time_ms,
            },
        )

    def on_run_failed(self, strategy_name, symbol, error) -> None:
        self.audit_log.log(
            "run_failed",
            {"strategy": strategy_name, "symbol": symbol, "error": type(error).__name__, "message": str(error)},
        )


@dataclass
class CompositeObserver:
    observers: list[SimulationObserver] = field(default_factory=list)

    def on_run_start(self, strategy_name, symbol, initial_budget, bars) -> None:
        for observer in self.observers:
            observer.on_run_start(strategy_name, symbol, initial_budget, bars)

    def on_trade(self, trade, portfolio) -> None:
        for observer in self.observers:
            observer.on_trade(trade, portfolio)

    def on_run_end(self, result) -> None:
        for observer in self.observers:
            observer.on_run_end(result)

    def on_run_failed(self, strategy_name, symbol, error) -> None:
        for observer in self.observers:
            observer.on_run_failed(strategy_name, symbol, error)
