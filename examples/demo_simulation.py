from datetime import date, timedelta
from decimal import Decimal

from tradesim.market import PriceBar
from tradesim.monitoring import LogNotifier, NotifierObserver
from tradesim.simulator import SimulationEngine
from tradesim.strategy import BuyAndHoldStrategy


closes = ["100", "105", "95", "110", "108"]
start = date(2024, 6, 3)

bars = [
    PriceBar(
        date=start + timedelta(days=index),
        symbol="DEMO",
        open=Decimal(close),
        high=Decimal(close),
        low=Decimal(close),
        close=Decimal(close),
        adjusted_close=Decimal(close),
        volume=1_000_000,
    )
    for index, close in enumerate(closes)
]

engine = SimulationEngine(
    BuyAndHoldStrategy(),
    initial_budget=Decimal("10000"),
    observer=NotifierObserver(LogNotifier(prefix="[DEMO]")),
)
result = engine.run("DEMO", bars)

print("Final value:", result.final_budget)
print("Total return %:", result.total_return_percent)
print("Max drawdown %:", result.max_drawdown_percent.quantize(Decimal("0.001")))
print("Sharpe ratio:", result.sharpe_ratio.quantize(Decimal("0.0001")))
print("Equity curve:", [str(point.value) for point in result.equity_curve])
