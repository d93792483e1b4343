"""Result persistence."""

from tradesim.persistence.store import ResultStore, StoredRun

__all__ = ["ResultStore", "StoredRun"]
