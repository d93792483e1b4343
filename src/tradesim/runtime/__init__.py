"""Runtime helpers."""

from tradesim.runtime.context import RunContext, create_run_context
from tradesim.runtime.runner import build_observer, run_from_config

__all__ = [
    "RunContext",
    "build_observer",
    "create_run_context",
    "run_from_config",
]
