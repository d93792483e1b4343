"""Config loading."""

from tradesim.config.loader import compute_config_hash, load_config, parse_budget, serialize_config
from tradesim.config.models import MonitoringConfig, SimulationConfig, StorageConfig, StrategyConfig

__all__ = [
    "MonitoringConfig",
    "SimulationConfig",
    "StorageConfig",
    "StrategyConfig",
    "compute_config_hash",
    "load_config",
    "parse_budget",
    "serialize_config",
]
