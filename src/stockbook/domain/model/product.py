"""Product aggregate.

A product carries its own list of stock allocations: one entry per invoice
that currently claims some of its stock.  The list is never mutated in
place; every change returns a new Product.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Allocation:
    """A claim by one invoice on some of a product's stock."""

    invoice_id: str
    quantity: int

    def __post_init__(self) -> None:
        Quantity(self.quantity)


@dataclass(frozen=True)
class Product:
    """A product in the catalogue.

    Invariant: ``sales`` holds at most one Allocation per invoice id.
    ``allocate()`` replaces an existing entry rather than appending a
    second one, so the invariant cannot be broken through this API.
    """

    id: str
    name: str
    price: Money
    unit_id: str
    category_id: str | None = None
    threshold_value: int | None = None
    sales: tuple[Allocation, ...] = ()

    # --- Allocations ----------------------------------------------------------

    def allocate(self, invoice_id: str, quantity: int) -> Product:
        """Record that *invoice_id* now claims *quantity* units."""
        kept = tuple(s for s in self.sales if s.invoice_id != invoice_id)
        return replace(self, sales=kept + (Allocation(invoice_id, quantity),))

    def release(self, invoice_id: str) -> Product:
        """Drop the allocation held by *invoice_id*, if there is one."""
        if not self.holds(invoice_id):
            return self
        return replace(
            self, sales=tuple(s for s in self.sales if s.invoice_id != invoice_id)
        )

    def holds(self, invoice_id: str) -> bool:
        return any(s.invoice_id == invoice_id for s in self.sales)

    def allocated_quantity(self, exclude_invoice_id: str | None = None) -> int:
        return sum(
            s.quantity for s in self.sales if s.invoice_id != exclude_invoice_id
        )

    # --- Catalogue edits ------------------------------------------------------

    def update_price(self, new_price: Money) -> Product:
        """Change the list price.

        Existing invoices are unaffected: each line captured its own price.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        return replace(self, price=new_price)

    def is_low_stock(self, available: int) -> bool:
        """True when a positive threshold is set and *available* is at or below it."""
        if self.threshold_value is None or self.threshold_value <= 0:
            return False
        return available <= self.threshold_value
