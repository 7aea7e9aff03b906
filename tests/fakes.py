"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON-backed classes
but keep everything in memory. No file I/O, no side effects.
"""

from __future__ import annotations

import itertools
from typing import Any

from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.repository.storage_port import StoragePort


class FakeLedgerRepository(LedgerRepository):

    def __init__(self, state: LedgerState | None = None) -> None:
        self.state = state or LedgerState()
        self.save_count = 0

    def load(self) -> LedgerState:
        return self.state

    def save(self, state: LedgerState) -> None:
        self.state = state
        self.save_count += 1


class InMemoryStorage(StoragePort):

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(initial or {})
        self.writes: list[str] = []

    def load(self, key: str) -> Any | None:
        return self.data.get(key)

    def save(self, key: str, value: Any) -> None:
        self.data[key] = value
        self.writes.append(key)


def sequential_ids(prefix: str = "id"):
    """Deterministic id factory: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"
