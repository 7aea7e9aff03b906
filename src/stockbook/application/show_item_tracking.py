"""Application service: Item Tracking use case (query).

Lists every stock movement, goods in from purchase entries and goods out
on invoices, newest first, with optional filters.
"""

from __future__ import annotations

from datetime import date

from stockbook.application.dto import MovementDTO
from stockbook.domain.model.stock import MovementDirection
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class ShowItemTrackingHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        direction: str | None = None,
        search: str | None = None,
        since: date | None = None,
    ) -> list[MovementDTO]:
        state = self._ledger_repo.load()
        movements = self._ledger.movements(state)

        if direction is not None:
            wanted = MovementDirection(direction.upper())
            movements = [m for m in movements if m.direction == wanted]
        if search:
            term = search.lower()
            movements = [
                m for m in movements
                if term in m.product_name.lower() or term in m.details.lower()
            ]
        if since is not None:
            movements = [m for m in movements if m.date >= since]

        return [
            MovementDTO(
                date=m.date.isoformat(),
                product_name=m.product_name,
                details=m.details,
                quantity=m.quantity,
                unit_name=m.unit_name,
                direction=m.direction.value,
            )
            for m in movements
        ]
