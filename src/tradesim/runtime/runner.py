"""Wire a configuration into a complete simulation run."""

from __future__ import annotations

from typing import Optional

from tradesim.config.models import SimulationConfig
from tradesim.market.loader import filter_date_range, load_symbol
from tradesim.monitoring.audit import AuditLog
from tradesim.monitoring.notifier import LogNotifier, Notifier
from tradesim.monitoring.observer import AuditObserver, CompositeObserver, NotifierObserver, SimulationObserver
from tradesim.persistence.store import ResultStore
from tradesim.portfolio.errors import NoMarketData
from tradesim.runtime.context import RunContext, create_run_context
from tradesim.simulator.engine import SimulationEngine
from tradesim.simulator.models import SimulationResult
from tradesim.strategy.registry import build_strategy


def build_observer(
    config: SimulationConfig,
    context: RunContext,
    notifier: Optional[Notifier] = None,
) -> CompositeObserver:
    observers: list[SimulationObserver] = []
    if notifier is None and config.monitoring.console:
        notifier = LogNotifier(prefix=config.monitoring.notifier_prefix)
    if notifier is not None:
        observers.append(NotifierObserver(notifier))
    if config.monitoring.audit_log_path:
        audit = AuditLog(config.monitoring.audit_log_path, run_id=context.run_id, config_hash=context.config_hash)
        observers.append(AuditObserver(audit))
    return CompositeObserver(observers)


def run_from_config(
    config: SimulationConfig,
    context: Optional[RunContext] = None,
    notifier: Optional[Notifier] = None,
) -> tuple[SimulationResult, Optional[int]]:
    """Load data, run the configured strategy and persist the result.

    Returns the result and the stored run id, or ``None`` when no database
    is configured. Fatal simulation errors propagate; nothing is stored
    for a failed run.
    """
    if context is None:
        context = create_run_context(None, config.run_id_prefix)
    observer = build_observer(config, context, notifier)

    bars = load_symbol(config.symbol, config.data_dir, notifier=notifier)
    bars = filter_date_range(bars, config.start_date, config.end_date)
    if not bars:
        error = NoMarketData(
            f"No market data for {config.symbol} between {config.start_date} and {config.end_date}"
        )
        observer.on_run_failed(config.strategy.name, config.symbol, error)
        raise error

    engine = SimulationEngine(build_strategy(config.strategy), config.initial_budget, observer=observer)
    result = engine.run(config.symbol, bars)

    if not config.storage.database_path:
        return result, None
    store = ResultStore(config.storage.database_path)
    try:
        run_id = store.save(result, notes=f"run {context.run_id}")
    finally:
        store.close()
    if notifier is not None:
        notifier.notify("SAVED", f"simulation run stored with id {run_id}")
    return result, run_id
