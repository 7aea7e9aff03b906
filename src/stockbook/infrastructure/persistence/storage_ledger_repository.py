"""LedgerRepository backed by any StoragePort.

Loads every collection on ``load()``.  ``save()`` writes only the
collections that differ from the last snapshot loaded or saved, each one
in full.
"""

from __future__ import annotations

from decimal import InvalidOperation

from stockbook.config import get_logger
from stockbook.domain.exceptions import DomainException
from stockbook.domain.model.ledger_state import COLLECTIONS, LedgerState
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.repository.storage_port import StoragePort
from stockbook.infrastructure.persistence.codec import (
    collection_to_domain,
    collection_to_raw,
)

logger = get_logger(__name__)

_DEFAULTS = LedgerState()


class StorageLedgerRepository(LedgerRepository):

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage
        self._last: LedgerState | None = None

    # --- LedgerRepository interface -------------------------------------------

    def load(self) -> LedgerState:
        values = {name: self._load_collection(name) for name in COLLECTIONS}
        state = LedgerState(**values)
        self._last = state
        return state

    def save(self, state: LedgerState) -> None:
        if self._last is None:
            changed = list(COLLECTIONS)
        else:
            changed = state.changed_collections(self._last)
        for name in changed:
            self._storage.save(name, collection_to_raw(name, getattr(state, name)))
        if changed:
            logger.info("ledger_saved", collections=changed)
        self._last = state

    # --- Helpers --------------------------------------------------------------

    def _load_collection(self, name: str):
        raw = self._storage.load(name)
        if raw is None:
            return getattr(_DEFAULTS, name)
        try:
            return collection_to_domain(name, raw)
        except (
            KeyError,
            TypeError,
            ValueError,
            InvalidOperation,
            DomainException,
        ) as exc:
            logger.warning("collection_malformed", collection=name, error=repr(exc))
            return getattr(_DEFAULTS, name)