"""Application service: Update Invoice use case.

The ledger reverts everything the invoice held before applying the new
lines, so the saved snapshot reflects only the replacement contents.
Header fields the caller leaves unset keep their stored values.
"""

from __future__ import annotations

from stockbook.application.dto import InvoiceDTO, InvoiceSpec
from stockbook.application.invoice_input import build_draft
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class UpdateInvoiceHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, invoice_id: str, spec: InvoiceSpec) -> InvoiceDTO:
        state = self._ledger_repo.load()
        draft = build_draft(spec, state, current=state.invoice(invoice_id))

        new_state, invoice = self._ledger.update_invoice(state, invoice_id, draft)
        self._ledger_repo.save(new_state)

        return InvoiceDTO.from_domain(invoice, new_state)
