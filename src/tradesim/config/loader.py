"""Load simulation configuration files."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

import yaml

from tradesim.config.models import MonitoringConfig, SimulationConfig, StorageConfig, StrategyConfig


def load_config(path: str | Path) -> SimulationConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    version = str(_require(data, "version"))
    run_id_prefix = str(data.get("run_id_prefix", name))
    symbol = str(_require(data, "symbol"))
    initial_budget = parse_budget(_require(data, "initial_budget"))

    start_date = _optional_date(data.get("start_date"), "start_date")
    end_date = _optional_date(data.get("end_date"), "end_date")
    if start_date and end_date and start_date > end_date:
        raise ValueError(f"start_date {start_date} is after end_date {end_date}")

    return SimulationConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        symbol=symbol,
        initial_budget=initial_budget,
        strategy=_parse_strategy(_require(data, "strategy")),
        data_dir=str(data.get("data_dir", "tdata")),
        start_date=start_date,
        end_date=end_date,
        monitoring=_parse_monitoring(data.get("monitoring") or {}),
        storage=_parse_storage(data.get("storage") or {}),
    )


def parse_budget(value: Any) -> Decimal:
    budget = _parse_decimal(value, "initial_budget")
    if budget < 0:
        raise ValueError(f"Invalid initial_budget: {budget}")
    return budget


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _parse_decimal(value: Any, key: str) -> Decimal:
    try:
        # via str so YAML floats keep their written digits
        parsed = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc
    if not parsed.is_finite():
        raise ValueError(f"Invalid {key}: {value}")
    return parsed


def _optional_date(value: Any, key: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc


def _parse_strategy(data: Any) -> StrategyConfig:
    if isinstance(data, str):
        return StrategyConfig(name=data)
    if not isinstance(data, dict):
        raise ValueError("strategy must be a name or a mapping")
    return StrategyConfig(
        name=str(_require(data, "name")),
        parameters=dict(data.get("parameters") or {}),
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    audit_log_path = data.get("audit_log_path", "runtime/audit.log")
    return MonitoringConfig(
        audit_log_path=str(audit_log_path) if audit_log_path else None,
        notifier_prefix=str(data.get("notifier_prefix", "[SIM]")),
        console=bool(data.get("console", True)),
    )


def _parse_storage(data: dict[str, Any]) -> StorageConfig:
    database_path = data.get("database_path")
    return StorageConfig(database_path=str(database_path) if database_path else None)


def serialize_config(config: SimulationConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["initial_budget"] = str(config.initial_budget)
    payload["start_date"] = config.start_date.isoformat() if config.start_date else None
    payload["end_date"] = config.end_date.isoformat() if config.end_date else None
    return payload
