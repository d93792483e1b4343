"""Notification backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    prefix: str = "[SIM]"

    def notify(self, event: str, message: str) -> None:
        print(f"{self.prefix} {event}: {message}")


@dataclass
class RecordingNotifier(Notifier):
    """Buffers every event in order, optionally passing each one on."""

    forward: Optional[Notifier] = None
    events: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))
        if self.forward is not None:
            self.forward.notify(event, message)

    @property
    def names(self) -> list[str]:
        return [event for event, _ in self.events]

    def messages(self, event: str) -> list[str]:
        return [message for name, message in self.events if name == event]

    def clear(self) -> None:
        self.events.clear()
