"""Abstract repository for the LedgerState snapshot.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON files, in-memory) live
in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockbook.domain.model.ledger_state import LedgerState


class LedgerRepository(ABC):

    @abstractmethod
    def load(self) -> LedgerState:
        """Return the current snapshot of every collection."""

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """Persist *state*, writing each changed collection in full."""
