"""Application service: Show / List Invoices use cases (queries)."""

from __future__ import annotations

from stockbook.application.dto import InvoiceDTO
from stockbook.domain.exceptions import EntityNotFoundError
from stockbook.domain.repository.ledger_repository import LedgerRepository


class ShowInvoiceHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self, invoice_ref: str) -> InvoiceDTO:
        """Look an invoice up by ID, then by invoice number."""
        state = self._ledger_repo.load()
        invoice = state.invoice(invoice_ref)
        if invoice is None:
            invoice = next(
                (i for i in state.invoices if i.invoice_number == invoice_ref), None
            )
        if invoice is None:
            raise EntityNotFoundError(f"Invoice '{invoice_ref}' not found")
        return InvoiceDTO.from_domain(invoice, state)


class ListInvoicesHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self) -> list[InvoiceDTO]:
        state = self._ledger_repo.load()
        return [InvoiceDTO.from_domain(i, state) for i in state.invoices]
