"""Sqlite store for finished simulation runs and their trades."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from tradesim.portfolio.models import Trade, TradeAction
from tradesim.simulator.models import SimulationResult

SCHEMA = """
CREATE TABLE IF NOT EXISTS simulation_run (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    strategy_name TEXT NOT NULL,
    symbol TEXT NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    initial_budget TEXT NOT NULL,
    final_budget TEXT NOT NULL,
    total_return TEXT NOT NULL,
    total_return_amount TEXT NOT NULL,
    total_trades INTEGER NOT NULL DEFAULT 0,
    winning_trades INTEGER NOT NULL DEFAULT 0,
    losing_trades INTEGER NOT NULL DEFAULT 0,
    max_drawdown TEXT,
    sharpe_ratio TEXT,
    data_points_used INTEGER NOT NULL,
    executed_at TEXT NOT NULL,
    execution_time_ms INTEGER,
    notes TEXT
);
CREATE INDEX IF NOT EXISTS idx_simulation_run_strategy ON simulation_run(strategy_name);
CREATE INDEX IF NOT EXISTS idx_simulation_run_symbol ON simulation_run(symbol);
CREATE TABLE IF NOT EXISTS simulation_trade (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    simulation_run_id INTEGER NOT NULL REFERENCES simulation_run(id) ON DELETE CASCADE,
    trade_date TEXT NOT NULL,
    action TEXT NOT NULL,
    symbol TEXT NOT NULL,
    shares TEXT NOT NULL,
    price TEXT NOT NULL,
    total_amount TEXT NOT NULL,
    portfolio_value TEXT NOT NULL,
    notes TEXT
);
CREATE INDEX IF NOT EXISTS idx_simulation_trade_run_id ON simulation_trade(simulation_run_id);
"""


@dataclass(frozen=True)
class StoredRun:
    run_id: int
    strategy_name: str
    symbol: str
    start_date: date
    end_date: date
    initial_budget: Decimal
    final_budget: Decimal
    total_return_percent: Decimal
    total_return_amount: Decimal
    total_trades: int
    winning_trades: int
    losing_trades: int
    max_drawdown_percent: Decimal
    sharpe_ratio: Decimal
    data_points_used: int
    executed_at: datetime
    execution_time_ms: int
    notes: Optional[str]


class ResultStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self._connect()

    def _connect(self) -> sqlite3.Connection:
        if self._conn is None:
            conn = sqlite3.connect(self.path)
            conn.execute("PRAGMA foreign_keys = ON")
            conn.executescript(SCHEMA)
            conn.commit()
            self._conn = conn
        return self._conn

    def save(self, result: SimulationResult, notes: Optional[str] = None) -> int:
        conn = self._connect()
        with conn:
            cursor = conn.execute(
                "INSERT INTO simulation_run (strategy_name, symbol, start_date, end_date, initial_budget, "
                "final_budget, total_return, total_return_amount, total_trades, winning_trades, losing_trades, "
                "max_drawdown, sharpe_ratio, data_points_used, executed_at, execution_time_ms, notes) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    result.strategy_name,
                    result.symbol,
                    result.start_date.isoformat(),
                    result.end_date.isoformat(),
                    str(result.initial_budget),
                    str(result.final_budget),
                    str(result.total_return_percent),
                    str(result.total_return_amount),
                    result.total_trades,
                    result.winning_trades,
                    result.losing_trades,
                    str(result.max_drawdown_percent),
                    str(result.sharpe_ratio),
                    result.data_points_used,
                    result.executed_at.isoformat(),
                    result.execution_time_ms,
                    notes,
                ),
            )
            run_id = cursor.lastrowid
            if run_id is None:
                raise RuntimeError("Failed to get generated ID for simulation run")
            conn.executemany(
                "INSERT INTO simulation_trade (simulation_run_id, trade_date, action, symbol, shares, price, "
                "total_amount, portfolio_value, notes) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    (
                        run_id,
                        trade.date.isoformat(),
                        trade.action.value,
                        trade.symbol,
                        str(trade.shares),
                        str(trade.price),
                        str(trade.notional),
                        str(result.final_budget),
                        trade.note or "",
                    )
                    for trade in result.trades
                ],
            )
        return run_id

    def get_run(self, run_id: int) -> Optional[StoredRun]:
        row = self._connect().execute(
            "SELECT id, strategy_name, symbol, start_date, end_date, initial_budget, final_budget, total_return, "
            "total_return_amount, total_trades, winning_trades, losing_trades, max_drawdown, sharpe_ratio, "
            "data_points_used, executed_at, execution_time_ms, notes FROM simulation_run WHERE id = ?",
            (run_id,),
        ).fetchone()
        if not row:
            return None
        return StoredRun(
            run_id=row[0],
            strategy_name=row[1],
            symbol=row[2],
            start_date=date.fromisoformat(row[3]),
            end_date=date.fromisoformat(row[4]),
            initial_budget=Decimal(row[5]),
            final_budget=Decimal(row[6]),
            total_return_percent=Decimal(row[7]),
            total_return_amount=Decimal(row[8]),
            total_trades=row[9],
            winning_trades=row[10],
            losing_trades=row[11],
            max_drawdown_percent=Decimal(row[12]),
            sharpe_ratio=Decimal(row[13]),
            data_points_used=row[14],
            executed_at=datetime.fromisoformat(row[15]),
            execution_time_ms=row[16],
            notes=row[17],
        )

    def list_trades(self, run_id: int) -> list[Trade]:
        rows = self._connect().execute(
            "SELECT trade_date, action, symbol, shares, price, notes FROM simulation_trade "
            "WHERE simulation_run_id = ? ORDER BY id",
            (run_id,),
        ).fetchall()
        return [
            Trade(
                date=date.fromisoformat(row[0]),
                action=TradeAction(row[1]),
                symbol=row[2],
                shares=Decimal(row[3]),
                price=Decimal(row[4]),
                note=row[5] or None,
            )
            for row in rows
        ]

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
