"""Invoice aggregate.

An invoice is stock outbound: each line item claims quantity from the
referenced product.  The stock effect itself is applied by the
StockLedger service, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.value_objects import Discount, Money, Quantity

MAX_LINE_ITEMS = 100


class InvoiceStatus(Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class LineItem:
    """One row of an invoice.

    ``price`` is captured when the line is written and does not follow
    later product price changes.
    """

    id: str
    product_id: str
    description: str
    quantity: int
    price: Money
    discount: Discount | None = None
    tax_percent: float | None = None

    def __post_init__(self) -> None:
        Quantity(self.quantity)

    @property
    def amount(self) -> Money:
        return self.price * self.quantity


@dataclass(frozen=True)
class LineItemSpec:
    """A line item that has not been persisted yet (no id)."""

    product_id: str
    quantity: int
    price: Money
    description: str = ""
    discount: Discount | None = None
    tax_percent: float | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        Quantity(self.quantity)

    def with_id(self, line_id: str) -> LineItem:
        return LineItem(
            id=self.id or line_id,
            product_id=self.product_id,
            description=self.description,
            quantity=self.quantity,
            price=self.price,
            discount=self.discount,
            tax_percent=self.tax_percent,
        )


@dataclass(frozen=True)
class InvoiceDraft:
    """Everything the caller supplies for a new invoice.

    The ledger assigns ``id``, line ids, ``currency`` and ``tax_amount``.
    """

    invoice_number: str
    client_name: str
    invoice_date: date
    due_date: date
    items: tuple[LineItemSpec, ...]
    client_email: str = ""
    client_contact: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    tax_id: str | None = None
    notes: str | None = None
    payment_link: str | None = None

    def __post_init__(self) -> None:
        if not self.invoice_number or not self.invoice_number.strip():
            raise ValidationError("Invoice number is required")
        if not self.client_name or not self.client_name.strip():
            raise ValidationError("Client name is required")
        if not self.items:
            raise ValidationError("Invoice must contain at least one item")
        if len(self.items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per invoice")
        if self.due_date < self.invoice_date:
            raise ValidationError("Due date cannot be before the invoice date")


@dataclass(frozen=True)
class Invoice:
    """Aggregate root for a sales invoice.

    The constructor does not validate, so stored invoices can be
    reconstituted as they were written.  New invoices come from
    ``InvoiceDraft`` via the StockLedger.
    """

    id: str
    invoice_number: str
    client_name: str
    invoice_date: date
    due_date: date
    currency: str
    items: tuple[LineItem, ...] = ()
    client_email: str = ""
    client_contact: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    tax_id: str | None = None
    tax_amount: Money | None = None
    notes: str | None = None
    payment_link: str | None = None

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.amount.in_currency(self.currency)
        return result

    @property
    def total(self) -> Money:
        if self.tax_amount is None:
            return self.subtotal
        return self.subtotal + self.tax_amount.in_currency(self.currency)

    def quantities_by_product(self) -> dict[str, int]:
        """Total quantity per product, merging duplicate product lines."""
        result: dict[str, int] = {}
        for item in self.items:
            result[item.product_id] = result.get(item.product_id, 0) + item.quantity
        return result

    def without_product(self, product_id: str) -> Invoice:
        return replace(
            self, items=tuple(i for i in self.items if i.product_id != product_id)
        )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_draft(
        invoice_id: str,
        draft: InvoiceDraft,
        line_ids: list[str],
        currency: str,
    ) -> Invoice:
        return Invoice(
            id=invoice_id,
            invoice_number=draft.invoice_number.strip(),
            client_name=draft.client_name.strip(),
            client_email=draft.client_email,
            client_contact=draft.client_contact,
            invoice_date=draft.invoice_date,
            due_date=draft.due_date,
            status=draft.status,
            currency=currency,
            items=tuple(
                spec.with_id(line_id) for spec, line_id in zip(draft.items, line_ids)
            ),
            tax_id=draft.tax_id,
            notes=draft.notes,
            payment_link=draft.payment_link,
        )

