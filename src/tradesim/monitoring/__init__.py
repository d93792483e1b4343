"""Monitoring exports."""

from tradesim.monitoring.audit import AuditLog
from tradesim.monitoring.notifier import LogNotifier, Notifier, RecordingNotifier
from tradesim.monitoring.observer import (
    AuditObserver,
    CompositeObserver,
    NotifierObserver,
    NullObserver,
    SimulationObserver,
)

__all__ = [
    "AuditLog",
    "AuditObserver",
    "CompositeObserver",
    "LogNotifier",
    "Notifier",
    "NotifierObserver",
    "NullObserver",
    "RecordingNotifier",
    "SimulationObserver",
]
