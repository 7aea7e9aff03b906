"""Turn an InvoiceSpec into a domain InvoiceDraft.

Shared by the create and update use cases.
"""

from __future__ import annotations

from datetime import date

from stockbook.application.dto import InvoiceItemSpec, InvoiceSpec
from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    LineItemSpec,
)
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.value_objects import Money


def parse_status(raw: str) -> InvoiceStatus:
    for status in InvoiceStatus:
        if status.value.lower() == raw.strip().lower():
            return status
    allowed = ", ".join(s.value for s in InvoiceStatus)
    raise ValidationError(f"Unknown invoice status '{raw}' (expected one of: {allowed})")


def build_draft(
    spec: InvoiceSpec, state: LedgerState, current: Invoice | None = None
) -> InvoiceDraft:
    """Build the draft for a create, or for an update of *current*.

    Header fields the spec leaves as None are taken from *current* when
    there is one, so an edit of the notes alone keeps the stored dates
    and status.
    """
    currency = state.settings.currency

    invoice_date = spec.invoice_date or (current.invoice_date if current else date.today())
    due_date = spec.due_date
    if due_date is None:
        kept = current.due_date if current else None
        due_date = kept if kept is not None and kept >= invoice_date else invoice_date
    if spec.status is not None:
        status = parse_status(spec.status)
    else:
        status = current.status if current else InvoiceStatus.DRAFT

    return InvoiceDraft(
        invoice_number=spec.invoice_number,
        client_name=spec.client_name,
        client_email=_pick(spec.client_email, current, "client_email", ""),
        client_contact=_pick(spec.client_contact, current, "client_contact"),
        invoice_date=invoice_date,
        due_date=due_date,
        status=status,
        tax_id=_pick(spec.tax_id, current, "tax_id"),
        notes=_pick(spec.notes, current, "notes"),
        payment_link=current.payment_link if current else None,
        items=tuple(_line(item, state, currency) for item in spec.items),
    )


def _pick(value, current: Invoice | None, field_name: str, default=None):
    if value is not None:
        return value
    if current is not None:
        return getattr(current, field_name)
    return default


def _line(item: InvoiceItemSpec, state: LedgerState, currency: str) -> LineItemSpec:
    """Resolve the product reference and fill in price and description.

    An unresolvable reference is passed through as a product ID; whether
    that is accepted is the ledger's policy decision.
    """
    product = state.product(item.product) or state.product_by_name(item.product)
    product_id = product.id if product else item.product

    if item.price is not None:
        price = Money.of(item.price, currency)
    elif product is not None:
        price = product.price.in_currency(currency)
    else:
        raise ValidationError(
            f"Price is required for '{item.product}' (not in the catalogue)"
        )

    description = item.description
    if description is None:
        description = product.name if product else ""

    return LineItemSpec(
        product_id=product_id,
        quantity=item.quantity,
        price=price,
        description=description,
    )
