"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class StrategyConfig:
    name: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: Optional[str] = "runtime/audit.log"
    notifier_prefix: str = "[SIM]"
    console: bool = True


@dataclass(frozen=True)
class StorageConfig:
    database_path: Optional[str] = None


@dataclass(frozen=True)
class SimulationConfig:
    name: str
    version: str
    run_id_prefix: str
    symbol: str
    initial_budget: Decimal
    strategy: StrategyConfig
    data_dir: str = "tdata"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monitoring: MonitoringConfig = MonitoringConfig()
    storage: StorageConfig = StorageConfig()
