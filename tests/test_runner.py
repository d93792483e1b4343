from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

import pytest

from tradesim.config import MonitoringConfig, SimulationConfig, StorageConfig, StrategyConfig
from tradesim.monitoring import AuditLog, RecordingNotifier
from tradesim.persistence import ResultStore
from tradesim.portfolio import NoMarketData
from tradesim.runtime import create_run_context, run_from_config


def _write_csv(path, closes, start=date(2024, 1, 1)):
    lines = ["Date,Open,High,Low,Close,Adj Close,Volume"]
    for index, close in enumerate(closes):
        day = (start + timedelta(days=index)).isoformat()
        lines.append(f"{day},{close},{close},{close},{close},{close},1000")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _config(tmp_path, **overrides):
    config = SimulationConfig(
        name="test",
        version="1",
        run_id_prefix="test",
        symbol="TEST",
        initial_budget=Decimal("10000"),
        strategy=StrategyConfig(name="buy_and_hold"),
        data_dir=str(tmp_path / "tdata"),
        monitoring=MonitoringConfig(audit_log_path=str(tmp_path / "audit.log"), console=False),
        storage=StorageConfig(database_path=str(tmp_path / "runs.db")),
    )
    return replace(config, **overrides)


def test_run_from_config_runs_and_stores(tmp_path):
    _write_csv(tmp_path / "tdata" / "TEST.csv", [100, 105, 95, 110, 108])
    config = _config(tmp_path)
    notifier = RecordingNotifier()
    context = create_run_context(None, config.run_id_prefix, run_id="run-42")

    result, run_id = run_from_config(config, context=context, notifier=notifier)

    assert result.final_budget == Decimal("10800")
    assert result.total_return_percent == Decimal("8")
    assert run_id is not None
    assert notifier.names == ["RUN_START", "BUY", "RUN_END", "SAVED"]

    store = ResultStore(config.storage.database_path)
    stored = store.get_run(run_id)
    store.close()
    assert stored is not None
    assert stored.final_budget == Decimal("10800")
    assert stored.notes == "run run-42"

    records = AuditLog(config.monitoring.audit_log_path).read()
    assert [record["event"] for record in records] == ["run_start", "trade", "run_end"]
    assert {record["run_id"] for record in records} == {"run-42"}


def test_run_from_config_applies_date_range_without_storage(tmp_path):
    _write_csv(tmp_path / "tdata" / "TEST.csv", [100, 105, 95, 110, 108])
    config = _config(
        tmp_path,
        start_date=date(2024, 1, 2),
        end_date=date(2024, 1, 4),
        storage=StorageConfig(database_path=None),
    )

    result, run_id = run_from_config(config)

    assert run_id is None
    assert result.data_points_used == 3
    assert result.start_date == date(2024, 1, 2)
    assert result.trades[0].price == Decimal("105")
    shares = Decimal("95.23809523")
    assert result.trades[0].shares == shares
    assert result.final_budget == Decimal("10000") - shares * Decimal("105") + shares * Decimal("110")


def test_run_from_config_empty_range_fails_and_is_audited(tmp_path):
    _write_csv(tmp_path / "tdata" / "TEST.csv", [100, 105])
    config = _config(tmp_path, start_date=date(2025, 1, 1))

    with pytest.raises(NoMarketData):
        run_from_config(config)

    records = AuditLog(config.monitoring.audit_log_path).read()
    assert records[-1]["event"] == "run_failed"
    assert not (tmp_path / "runs.db").exists()


def test_run_from_config_uses_configured_strategy(tmp_path):
    _write_csv(tmp_path / "tdata" / "TEST.csv", [10, 10, 10, 12, 14, 9, 6, 12, 20, 30, 40, 50, 35, 25])
    config = _config(
        tmp_path,
        strategy=StrategyConfig(name="moving_average_cross", parameters={"fast_window": 2, "slow_window": 3}),
    )

    result, run_id = run_from_config(config)

    assert result.strategy_name == "MA Cross 2/3"
    assert result.total_trades == 4
    assert (result.winning_trades, result.losing_trades) == (1, 1)
    assert run_id is not None
