"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from stockbook.domain.model.invoice import Invoice
from stockbook.domain.model.ledger_state import LedgerState


@dataclass(frozen=True)
class InvoiceItemSpec:
    """Input: one invoice line.

    ``product`` is a product ID or an exact product name.  ``price``
    defaults to the product's list price.
    """

    product: str
    quantity: int
    price: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class InvoiceSpec:
    """Input: everything needed to create or replace an invoice.

    Optional fields left as None take the stored invoice's value on an
    update.  On create the dates default to today (due on the invoice
    date) and the status to Draft.
    """

    invoice_number: str
    client_name: str
    items: list[InvoiceItemSpec]
    invoice_date: date | None = None
    due_date: date | None = None
    client_email: str | None = None
    client_contact: str | None = None
    status: str | None = None
    tax_id: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class InvoiceLineDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    description: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class InvoiceDTO:
    """Output: a complete invoice as displayed to the user."""

    id: str
    invoice_number: str
    client_name: str
    status: str
    invoice_date: str
    due_date: str
    currency: str
    items: list[InvoiceLineDTO] = field(default_factory=list)
    subtotal: str = ""
    tax: str = ""
    total: str = ""

    @staticmethod
    def from_domain(invoice: Invoice, state: LedgerState) -> InvoiceDTO:
        def product_name(product_id: str) -> str:
            product = state.product(product_id)
            return product.name if product else "N/A"

        return InvoiceDTO(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_name=invoice.client_name,
            status=invoice.status.value,
            invoice_date=invoice.invoice_date.isoformat(),
            due_date=invoice.due_date.isoformat(),
            currency=invoice.currency,
            items=[
                InvoiceLineDTO(
                    product_id=line.product_id,
                    product_name=product_name(line.product_id),
                    description=line.description,
                    quantity=line.quantity,
                    unit_price=str(line.price.in_currency(invoice.currency)),
                    line_total=str(line.amount.in_currency(invoice.currency)),
                )
                for line in invoice.items
            ],
            subtotal=str(invoice.subtotal),
            tax=(
                str(invoice.tax_amount)
                if invoice.tax_amount is not None and invoice.tax_amount.amount
                else ""
            ),
            total=str(invoice.total),
        )


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    product_name: str
    received: int
    allocated: int
    available: int
    threshold: int | None
    low: bool


@dataclass(frozen=True)
class MovementDTO:
    date: str
    product_name: str
    details: str
    quantity: int
    unit_name: str
    direction: str


@dataclass(frozen=True)
class PurchaseItemSpec:
    """Input: one purchase-order or goods-received line (product ID or name)."""

    product: str
    quantity: int
    price: str | None = None


@dataclass(frozen=True)
class PurchaseOrderLineDTO:
    product_name: str
    quantity: int
    received: int
    unit_price: str


@dataclass(frozen=True)
class PurchaseOrderDTO:
    id: str
    po_number: str
    date: str
    supplier_name: str
    status: str
    items: list[PurchaseOrderLineDTO]
    total: str
    expected_delivery_date: str = ""
    notes: str = ""
