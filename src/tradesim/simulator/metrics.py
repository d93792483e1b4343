"""Performance statistics derived from a finished run."""

from __future__ import annotations

from collections import deque
from decimal import Decimal
from typing import Sequence

from tradesim.portfolio.models import Trade, TradeAction
from tradesim.simulator.models import EquityPoint, PerformanceMetrics

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TRADING_DAYS_PER_YEAR = 252


def total_return(initial_budget: Decimal, final_value: Decimal) -> tuple[Decimal, Decimal]:
    amount = final_value - initial_budget
    if initial_budget == ZERO:
        return amount, ZERO
    return amount, amount / initial_budget * HUNDRED


def max_drawdown_percent(values: Sequence[Decimal], initial_budget: Decimal) -> Decimal:
    """Largest decline from the running peak, seeded with the initial budget."""
    peak = initial_budget
    worst = ZERO
    for value in values:
        if value > peak:
            peak = value
        if peak <= ZERO:
            continue
        drawdown = (peak - value) / peak * HUNDRED
        if drawdown > worst:
            worst = drawdown
    return worst


def sharpe_ratio(values: Sequence[Decimal]) -> Decimal:
    """Annualized mean/stddev of daily returns with a zero risk-free rate."""
    if len(values) < 2:
        return ZERO
    returns = [
        (current - previous) / previous if previous != ZERO else ZERO
        for previous, current in zip(values, values[1:])
    ]
    mean = sum(returns, ZERO) / len(returns)
    variance = sum(((value - mean) ** 2 for value in returns), ZERO) / len(returns)
    stddev = variance.sqrt()
    if stddev == ZERO:
        return ZERO
    return mean / stddev * Decimal(TRADING_DAYS_PER_YEAR).sqrt()


def classify_trades(trades: Sequence[Trade]) -> tuple[int, int]:
    """Count winning and losing sells using FIFO lot matching per symbol.

    Each sell consumes the oldest open buy lots first. A sell with positive
    realized P&L is a win, negative a loss, zero neither.
    """
    lots: dict[str, deque[list[Decimal]]] = {}
    wins = 0
    losses = 0
    for trade in trades:
        queue = lots.setdefault(trade.symbol, deque())
        if trade.action == TradeAction.BUY:
            queue.append([trade.shares, trade.price])
            continue

        remaining = trade.shares
        realized = ZERO
        while remaining > ZERO and queue:
            lot = queue[0]
            matched = min(remaining, lot[0])
            realized += (trade.price - lot[1]) * matched
            lot[0] -= matched
            remaining -= matched
            if lot[0] == ZERO:
                queue.popleft()
        if realized > ZERO:
            wins += 1
        elif realized < ZERO:
            losses += 1
    return wins, losses


def compute_metrics(
    equity_curve: Sequence[EquityPoint],
    trades: Sequence[Trade],
    initial_budget: Decimal,
    final_value: Decimal,
) -> PerformanceMetrics:
    values = [point.value for point in equity_curve]
    amount, percent = total_return(initial_budget, final_value)
    wins, losses = classify_trades(trades)
    return PerformanceMetrics(
        total_return_percent=percent,
        total_return_amount=amount,
        max_drawdown_percent=max_drawdown_percent(values, initial_budget),
        sharpe_ratio=sharpe_ratio(values),
        winning_trades=wins,
        losing_trades=losses,
    )
