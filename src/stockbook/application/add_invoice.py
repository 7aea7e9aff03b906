"""Application service: Add Invoice use case.

Builds the draft from the caller's InvoiceSpec, lets the StockLedger allocate
stock and record the invoice, then persists the new snapshot in one go.
"""

from __future__ import annotations

from stockbook.application.dto import InvoiceDTO, InvoiceSpec
from stockbook.application.invoice_input import build_draft
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class AddInvoiceHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, spec: InvoiceSpec) -> InvoiceDTO:
        state = self._ledger_repo.load()
        draft = build_draft(spec, state)

        new_state, invoice = self._ledger.add_invoice(state, draft)
        self._ledger_repo.save(new_state)

        return InvoiceDTO.from_domain(invoice, new_state)
