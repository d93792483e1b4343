"""Day-by-day strategy simulation over daily bars."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

from tradesim.market.loader import ensure_chronological
from tradesim.market.models import PriceBar
from tradesim.monitoring.observer import NullObserver, SimulationObserver
from tradesim.portfolio.errors import NoMarketData
from tradesim.portfolio.models import Portfolio, Trade
from tradesim.simulator.metrics import compute_metrics
from tradesim.simulator.models import EquityPoint, SimulationResult
from tradesim.strategy.base import TradingStrategy


class SimulationEngine:
    """Runs one strategy over one symbol, filling every trade at the day's close.

    A run either processes the whole bar sequence or raises on the first
    fatal error (no data, bad ordering, a trade the portfolio cannot
    absorb). No partial result is ever returned.
    """

    def __init__(
        self,
        strategy: TradingStrategy,
        initial_budget: Decimal,
        observer: Optional[SimulationObserver] = None,
    ) -> None:
        if initial_budget < 0:
            raise ValueError(f"initial_budget cannot be negative, got {initial_budget}")
        self.strategy = strategy
        self.initial_budget = initial_budget
        self.observer = observer or NullObserver()

    def run(self, symbol: str, bars: Sequence[PriceBar]) -> SimulationResult:
        if not bars:
            raise NoMarketData(f"No market data available for {symbol}")
        ensure_chronological(bars, symbol)

        started = time.perf_counter()
        executed_at = datetime.now(timezone.utc)
        self.observer.on_run_start(self.strategy.name, symbol, self.initial_budget, bars)
        try:
            portfolio, trades, equity_curve = self._replay(symbol, bars)
        except Exception as exc:
            self.observer.on_run_failed(self.strategy.name, symbol, exc)
            raise

        final_value = portfolio.total_value({symbol: bars[-1].close})
        metrics = compute_metrics(equity_curve, trades, self.initial_budget, final_value)

        result = SimulationResult(
            strategy_name=self.strategy.name,
            symbol=symbol,
            start_date=bars[0].date,
            end_date=bars[-1].date,
            initial_budget=self.initial_budget,
            final_budget=final_value,
            metrics=metrics,
            data_points_used=len(bars),
            execution_time_ms=int((time.perf_counter() - started) * 1000),
            executed_at=executed_at,
            trades=tuple(trades),
            equity_curve=tuple(equity_curve),
        )
        self.observer.on_run_end(result)
        return result

    def _replay(
        self,
        symbol: str,
        bars: Sequence[PriceBar],
    ) -> tuple[Portfolio, list[Trade], list[EquityPoint]]:
        self.strategy.initialize()
        portfolio = Portfolio(cash=self.initial_budget)
        trades: list[Trade] = []
        equity_curve: list[EquityPoint] = []

        for index, bar in enumerate(bars):
            history = bars[: index + 1]
            trade = self.strategy.decide(bar, portfolio, history)
            if trade is not None:
                portfolio = portfolio.apply(trade)
                trades.append(trade)
                self.observer.on_trade(trade, portfolio)

            # sampled every day, trade or not
            equity_curve.append(EquityPoint(date=bar.date, value=portfolio.total_value({symbol: bar.close})))

        self.strategy.finalize()
        return portfolio, trades, equity_curve
