import sqlite3
from datetime import date, timedelta
from decimal import Decimal

from tradesim.market import PriceBar
from tradesim.persistence import ResultStore
from tradesim.simulator import SimulationEngine
from tradesim.strategy import MovingAverageCrossParams, MovingAverageCrossStrategy


def _bars(closes):
    start = date(2024, 1, 1)
    bars = []
    for index, close in enumerate(closes):
        price = Decimal(str(close))
        bars.append(PriceBar(start + timedelta(days=index), "AAPL", price, price, price, price, price, 1000))
    return bars


def _result():
    closes = [10, 10, 10, 12, 14, 9, 6, 12, 20, 30, 40, 50, 35, 25]
    strategy = MovingAverageCrossStrategy(MovingAverageCrossParams(fast_window=2, slow_window=3))
    return SimulationEngine(strategy, Decimal("10000")).run("AAPL", _bars(closes))


def test_save_and_load_round_trip(tmp_path):
    result = _result()
    store = ResultStore(tmp_path / "db" / "runs.db")
    run_id = store.save(result, notes="unit test")

    stored = store.get_run(run_id)
    assert stored is not None
    assert stored.run_id == run_id
    assert stored.strategy_name == result.strategy_name
    assert stored.symbol == "AAPL"
    assert stored.start_date == result.start_date
    assert stored.end_date == result.end_date
    assert stored.initial_budget == result.initial_budget
    assert stored.final_budget == result.final_budget
    assert stored.total_return_percent == result.total_return_percent
    assert stored.total_return_amount == result.total_return_amount
    assert stored.max_drawdown_percent == result.max_drawdown_percent
    assert stored.sharpe_ratio == result.sharpe_ratio
    assert stored.total_trades == 4
    assert (stored.winning_trades, stored.losing_trades) == (1, 1)
    assert stored.data_points_used == result.data_points_used
    assert stored.executed_at == result.executed_at
    assert stored.notes == "unit test"

    assert store.list_trades(run_id) == list(result.trades)
    store.close()


def test_trade_rows_carry_notional_and_final_value(tmp_path):
    result = _result()
    path = tmp_path / "runs.db"
    store = ResultStore(path)
    run_id = store.save(result)
    store.close()

    conn = sqlite3.connect(path)
    rows = conn.execute(
        "SELECT action, total_amount, portfolio_value FROM simulation_trade WHERE simulation_run_id = ? ORDER BY id",
        (run_id,),
    ).fetchall()
    conn.close()

    assert [row[0] for row in rows] == ["BUY", "SELL", "BUY", "SELL"]
    assert [Decimal(row[1]) for row in rows] == [trade.notional for trade in result.trades]
    assert {Decimal(row[2]) for row in rows} == {result.final_budget}


def test_multiple_runs_get_distinct_ids(tmp_path):
    store = ResultStore(tmp_path / "runs.db")
    first = store.save(_result())
    second = store.save(_result())
    assert first != second
    assert store.get_run(999) is None
    assert store.list_trades(999) == []
    store.close()
    store.close()


def test_save_without_notes_stores_null(tmp_path):
    store = ResultStore(tmp_path / "runs.db")
    run_id = store.save(_result())
    stored = store.get_run(run_id)
    store.close()
    assert stored is not None
    assert stored.notes is None
