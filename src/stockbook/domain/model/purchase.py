"""Purchase orders and purchase entries.

A purchase order records what was ordered from a supplier.  A purchase
entry records goods actually received, optionally against an order; only
completed entries count as stock in.  Entries are never edited after
they are recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.value_objects import Money, Quantity


class PurchaseOrderStatus(Enum):
    PENDING = "Pending"
    PARTIALLY_FULFILLED = "Partially Fulfilled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PurchaseEntryStatus(Enum):
    DRAFT = "Draft"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class PurchaseOrderItem:
    product_id: str
    quantity: int
    price: Money
    quantity_received: int = 0

    @property
    def remaining_quantity(self) -> int:
        return max(self.quantity - self.quantity_received, 0)

    @property
    def is_fully_received(self) -> bool:
        return self.quantity_received >= self.quantity


@dataclass(frozen=True)
class ReceivedItem:
    product_id: str
    quantity_received: int

    def __post_init__(self) -> None:
        Quantity(self.quantity_received)


@dataclass(frozen=True)
class PurchaseEntry:
    """Goods received from a supplier (stock inbound)."""

    id: str
    entry_date: date
    supplier_id: str
    items: tuple[ReceivedItem, ...]
    status: PurchaseEntryStatus = PurchaseEntryStatus.COMPLETED
    purchase_order_id: str | None = None
    notes: str | None = None

    @property
    def counts_as_stock(self) -> bool:
        return self.status == PurchaseEntryStatus.COMPLETED

    def received_for(self, product_id: str) -> int:
        return sum(
            i.quantity_received for i in self.items if i.product_id == product_id
        )


@dataclass(frozen=True)
class PurchaseOrder:
    """Aggregate root for an order placed with a supplier."""

    id: str
    po_number: str
    date: date
    supplier_id: str
    vendor_name: str
    items: tuple[PurchaseOrderItem, ...]
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    vendor_contact: str | None = None
    expected_delivery_date: date | None = None
    notes: str | None = None

    @property
    def total_amount(self) -> Money:
        currency = self.items[0].price.currency if self.items else "USD"
        result = Money.zero(currency)
        for item in self.items:
            result = result + item.price * item.quantity
        return result

    @staticmethod
    def create(
        order_id: str,
        po_number: str,
        order_date: date,
        supplier_id: str,
        vendor_name: str,
        items: list[PurchaseOrderItem],
        **optional,
    ) -> PurchaseOrder:
        """Create a new purchase order with nothing received yet."""
        if not po_number or not po_number.strip():
            raise ValidationError("PO number is required")
        if not items:
            raise ValidationError("Purchase order must contain at least one item")
        for item in items:
            Quantity(item.quantity)
        return PurchaseOrder(
            id=order_id,
            po_number=po_number.strip(),
            date=order_date,
            supplier_id=supplier_id,
            vendor_name=vendor_name,
            items=tuple(replace(i, quantity_received=0) for i in items),
            **optional,
        )

    def receive(self, entry: PurchaseEntry) -> PurchaseOrder:
        """Apply the quantities of *entry* to this order.

        A cancelled or completed order keeps its status; otherwise the
        order becomes Completed once every item is fully received.
        """
        items = tuple(
            replace(
                item,
                quantity_received=item.quantity_received
                + entry.received_for(item.product_id),
            )
            for item in self.items
        )
        if self.status in (PurchaseOrderStatus.CANCELLED, PurchaseOrderStatus.COMPLETED):
            status = self.status
        elif all(item.is_fully_received for item in items):
            status = PurchaseOrderStatus.COMPLETED
        else:
            status = PurchaseOrderStatus.PARTIALLY_FULFILLED
        return replace(self, items=items, status=status)
