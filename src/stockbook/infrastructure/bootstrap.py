"""Composition root: wires the JSON store and ledger policy from settings.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockbook.config import get_settings
from stockbook.domain.service.stock_ledger import (
    LedgerPolicy,
    StockLedger,
    UnknownProductPolicy,
)
from stockbook.infrastructure.persistence.json_file_storage import JsonFileStorage
from stockbook.infrastructure.persistence.storage_ledger_repository import (
    StorageLedgerRepository,
)


def ledger_repository() -> StorageLedgerRepository:
    return StorageLedgerRepository(JsonFileStorage(get_settings().data_dir))


def stock_ledger() -> StockLedger:
    settings = get_settings()
    return StockLedger(
        LedgerPolicy(
            on_unknown_product=UnknownProductPolicy(settings.on_unknown_product),
            release_cancelled=settings.release_cancelled,
        )
    )
