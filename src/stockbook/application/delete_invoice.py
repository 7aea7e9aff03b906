"""Application service: Delete Invoice use case.

Deleting an unknown invoice is not an error; nothing is written.
"""

from __future__ import annotations

from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class DeleteInvoiceHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, invoice_id: str) -> bool:
        """Return True if an invoice was removed."""
        state = self._ledger_repo.load()
        new_state = self._ledger.delete_invoice(state, invoice_id)
        if new_state is state:
            return False
        self._ledger_repo.save(new_state)
        return True
