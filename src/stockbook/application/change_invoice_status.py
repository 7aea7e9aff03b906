"""Application service: Change Invoice Status use case.

A status change is an update with the same lines, so a cancelled
invoice gives its stock back (and a re-opened one claims it again)
when the ledger is configured to release cancelled invoices.
"""

from __future__ import annotations

from dataclasses import replace

from stockbook.application.dto import InvoiceDTO
from stockbook.application.invoice_input import parse_status
from stockbook.domain.exceptions import EntityNotFoundError
from stockbook.domain.model.invoice import InvoiceDraft, LineItemSpec
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class ChangeInvoiceStatusHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, invoice_id: str, status: str) -> InvoiceDTO:
        state = self._ledger_repo.load()
        invoice = state.invoice(invoice_id)
        if invoice is None:
            raise EntityNotFoundError(f"Invoice '{invoice_id}' not found")

        draft = InvoiceDraft(
            invoice_number=invoice.invoice_number,
            client_name=invoice.client_name,
            client_email=invoice.client_email,
            client_contact=invoice.client_contact,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            status=parse_status(status),
            tax_id=invoice.tax_id,
            notes=invoice.notes,
            payment_link=invoice.payment_link,
            items=tuple(
                LineItemSpec(
                    id=line.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price,
                    description=line.description,
                    discount=line.discount,
                    tax_percent=line.tax_percent,
                )
                for line in invoice.items
            ),
        )

        new_state, updated = self._ledger.update_invoice(state, invoice_id, draft)
        self._ledger_repo.save(new_state)
        return InvoiceDTO.from_domain(updated, new_state)
