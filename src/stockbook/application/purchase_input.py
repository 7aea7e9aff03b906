"""Resolve purchase input against the catalogue."""

from __future__ import annotations

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.product import Product
from stockbook.domain.model.purchase import PurchaseOrder, PurchaseOrderStatus
from stockbook.domain.model.reference import Supplier


def resolve_product(state: LedgerState, ref: str) -> Product:
    product = state.product(ref) or state.product_by_name(ref)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{ref}'")
    return product


def resolve_supplier(state: LedgerState, ref: str) -> Supplier:
    supplier = state.supplier(ref) or next(
        (s for s in state.suppliers if s.name.lower() == ref.lower()), None
    )
    if supplier is None:
        raise EntityNotFoundError(f"Supplier not found: '{ref}'")
    return supplier


def resolve_purchase_order(state: LedgerState, ref: str) -> PurchaseOrder:
    """Find an order by ID or PO number."""
    order = state.purchase_order(ref) or next(
        (o for o in state.purchase_orders if o.po_number == ref), None
    )
    if order is None:
        raise EntityNotFoundError(f"Purchase order '{ref}' not found")
    return order


def parse_order_status(raw: str) -> PurchaseOrderStatus:
    for status in PurchaseOrderStatus:
        if status.value.lower() == raw.strip().lower():
            return status
    allowed = ", ".join(s.value for s in PurchaseOrderStatus)
    raise ValidationError(
        f"Unknown purchase order status '{raw}' (expected one of: {allowed})"
    )
