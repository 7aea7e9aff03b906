"""LedgerState: one immutable snapshot of every collection.

Operations never modify a snapshot; they build a new one with
``dataclasses.replace``.  Collections an operation does not touch keep
their identity, which lets a repository persist only what changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stockbook.domain.model.invoice import Invoice
from stockbook.domain.model.product import Product
from stockbook.domain.model.purchase import PurchaseEntry, PurchaseOrder
from stockbook.domain.model.reference import AppSettings, Category, Supplier, Unit

# Store keys, in the order collections are loaded and saved.
COLLECTIONS = (
    "products",
    "purchase_orders",
    "purchase_entries",
    "invoices",
    "units",
    "categories",
    "suppliers",
    "settings",
)


@dataclass(frozen=True)
class LedgerState:
    products: tuple[Product, ...] = ()
    purchase_orders: tuple[PurchaseOrder, ...] = ()
    purchase_entries: tuple[PurchaseEntry, ...] = ()
    invoices: tuple[Invoice, ...] = ()
    units: tuple[Unit, ...] = ()
    categories: tuple[Category, ...] = ()
    suppliers: tuple[Supplier, ...] = ()
    settings: AppSettings = field(default_factory=AppSettings)

    # --- Lookups --------------------------------------------------------------

    def product(self, product_id: str) -> Product | None:
        return _find(self.products, product_id)

    def invoice(self, invoice_id: str) -> Invoice | None:
        return _find(self.invoices, invoice_id)

    def purchase_order(self, order_id: str) -> PurchaseOrder | None:
        return _find(self.purchase_orders, order_id)

    def unit(self, unit_id: str) -> Unit | None:
        return _find(self.units, unit_id)

    def category(self, category_id: str) -> Category | None:
        return _find(self.categories, category_id)

    def supplier(self, supplier_id: str) -> Supplier | None:
        return _find(self.suppliers, supplier_id)

    def product_by_name(self, name: str) -> Product | None:
        for product in self.products:
            if product.name.lower() == name.lower():
                return product
        return None

    def changed_collections(self, other: LedgerState) -> list[str]:
        """Names of collections whose value differs from *other*."""
        return [
            name for name in COLLECTIONS
            if getattr(self, name) is not getattr(other, name)
            and getattr(self, name) != getattr(other, name)
        ]


def _find(items, entity_id):
    for item in items:
        if item.id == entity_id:
            return item
    return None
