"""Domain service: Stock Ledger.

Owns the rules that tie invoices and purchase entries to product stock:

* available stock = received quantity (completed purchase entries)
  minus quantity allocated to live invoices;
* each invoice holds at most one allocation per product, equal to the
  sum of its line quantities for that product;
* an invoice update reverts every allocation the invoice held before
  applying the new lines, so quantities are replaced, never accumulated.

Every operation is a function ``(state, args) -> new state``.  The whole
new snapshot is built before anything is returned, so a caller that saves
the result never exposes products updated without their invoice (or the
reverse).
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from stockbook.config import get_logger
from stockbook.domain.exceptions import (
    EntityNotFoundError,
    UnknownProductError,
    ValidationError,
)
from stockbook.domain.model.invoice import Invoice, InvoiceDraft, InvoiceStatus
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.product import Product
from stockbook.domain.model.purchase import PurchaseEntry, PurchaseOrder
from stockbook.domain.model.stock import MovementDirection, StockLevel, StockMovement
from stockbook.domain.model.value_objects import Money

logger = get_logger(__name__)


class UnknownProductPolicy(Enum):
    SKIP = "skip"
    REJECT = "reject"


@dataclass(frozen=True)
class LedgerPolicy:
    """How the ledger treats the two ambiguous cases.

    ``on_unknown_product``: SKIP records the invoice but allocates nothing
    for lines whose product is missing; REJECT refuses the whole mutation.

    ``release_cancelled``: when true a Cancelled invoice holds no stock.
    """

    on_unknown_product: UnknownProductPolicy = UnknownProductPolicy.SKIP
    release_cancelled: bool = True


def short_id() -> str:
    return uuid.uuid4().hex[:9]


class StockLedger:

    def __init__(
        self,
        policy: LedgerPolicy | None = None,
        id_factory: Callable[[], str] = short_id,
    ) -> None:
        self._policy = policy or LedgerPolicy()
        self._id_factory = id_factory

    @property
    def policy(self) -> LedgerPolicy:
        return self._policy

    def new_id(self) -> str:
        return self._id_factory()

    # --- Queries ----------------------------------------------------------------

    def stock_received(self, state: LedgerState, product_id: str) -> int:
        return sum(
            entry.received_for(product_id)
            for entry in state.purchase_entries
            if entry.counts_as_stock
        )

    def available_stock(
        self,
        state: LedgerState,
        product_id: str,
        exclude_invoice_id: str | None = None,
    ) -> int:
        """Received minus allocated for *product_id*.

        ``exclude_invoice_id`` ignores that invoice's own allocation, so an
        invoice being edited can show what would be free without it.
        Unknown products report 0.  A negative result means oversold.
        """
        product = state.product(product_id)
        if product is None:
            return 0
        return self.stock_received(state, product_id) - product.allocated_quantity(
            exclude_invoice_id
        )

    def stock_levels(self, state: LedgerState) -> list[StockLevel]:
        levels = []
        for product in state.products:
            received = self.stock_received(state, product.id)
            allocated = product.allocated_quantity()
            levels.append(
                StockLevel(
                    product_id=product.id,
                    product_name=product.name,
                    received=received,
                    allocated=allocated,
                    threshold_value=product.threshold_value,
                    is_low=product.is_low_stock(received - allocated),
                )
            )
        return levels

    def low_stock_products(self, state: LedgerState) -> list[Product]:
        return [
            p for p in state.products
            if p.is_low_stock(self.available_stock(state, p.id))
        ]

    def movements(self, state: LedgerState) -> list[StockMovement]:
        """Item-tracking history: goods in and goods out, newest first."""
        rows: list[StockMovement] = []

        for entry in state.purchase_entries:
            supplier = state.supplier(entry.supplier_id)
            supplier_name = supplier.name if supplier else "N/A"
            order = (
                state.purchase_order(entry.purchase_order_id)
                if entry.purchase_order_id
                else None
            )
            if order is not None:
                details = f"PO #{order.po_number} from {supplier_name}"
            else:
                details = f"Manual Entry from {supplier_name}"
            for item in entry.items:
                rows.append(
                    self._movement(
                        state, entry.entry_date, item.product_id, details,
                        item.quantity_received, MovementDirection.IN,
                    )
                )

        for invoice in state.invoices:
            for line in invoice.items:
                rows.append(
                    self._movement(
                        state, invoice.invoice_date, line.product_id,
                        f"Invoice #{invoice.invoice_number}",
                        line.quantity, MovementDirection.OUT,
                    )
                )

        rows.sort(key=lambda m: m.date, reverse=True)
        return rows

    def check_consistency(self, state: LedgerState) -> list[str]:
        """Describe every allocation that disagrees with the invoices."""
        problems = []
        expected = {
            invoice.id: self._allocations_for(invoice)
            for invoice in state.invoices
        }
        for product in state.products:
            seen: set[str] = set()
            for sale in product.sales:
                if sale.invoice_id in seen:
                    problems.append(
                        f"Product '{product.name}' holds duplicate allocations "
                        f"for invoice {sale.invoice_id}"
                    )
                seen.add(sale.invoice_id)
                wanted = expected.get(sale.invoice_id)
                if wanted is None:
                    problems.append(
                        f"Product '{product.name}' allocation for unknown "
                        f"invoice {sale.invoice_id}"
                    )
                elif wanted.get(product.id) != sale.quantity:
                    problems.append(
                        f"Product '{product.name}' allocates {sale.quantity} to "
                        f"invoice {sale.invoice_id}, expected "
                        f"{wanted.get(product.id, 0)}"
                    )
            for invoice_id, wanted in expected.items():
                if product.id in wanted and invoice_id not in seen:
                    problems.append(
                        f"Product '{product.name}' is missing the allocation "
                        f"for invoice {invoice_id}"
                    )
        return problems

    # --- Invoices ---------------------------------------------------------------

    def add_invoice(
        self, state: LedgerState, draft: InvoiceDraft
    ) -> tuple[LedgerState, Invoice]:
        """Record a new invoice and allocate its stock in one transition."""
        self._check_products(state, (spec.product_id for spec in draft.items))

        existing_ids = {i.id for i in state.invoices}
        invoice_id = self.new_id()
        while invoice_id in existing_ids:
            invoice_id = self.new_id()

        invoice = Invoice.from_draft(
            invoice_id,
            draft,
            line_ids=[self.new_id() for _ in draft.items],
            currency=state.settings.currency,
        )
        invoice = self._with_tax(state, invoice)

        products = self._allocate(state.products, invoice)
        new_state = replace(
            state, products=products, invoices=state.invoices + (invoice,)
        )
        logger.info(
            "invoice_added",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            lines=len(invoice.items),
        )
        return new_state, invoice

    def update_invoice(
        self, state: LedgerState, invoice_id: str, draft: InvoiceDraft
    ) -> tuple[LedgerState, Invoice]:
        """Replace an invoice's contents.

        Steps:
        1. Revert every allocation held by *invoice_id* (none if unknown).
        2. Allocate the new lines, merged per product.
        3. Replace the stored invoice (append it if the id was unknown).
        """
        self._check_products(state, (spec.product_id for spec in draft.items))

        previous = state.invoice(invoice_id)
        if previous is None:
            logger.warning("invoice_update_unknown_id", invoice_id=invoice_id)

        invoice = Invoice.from_draft(
            invoice_id,
            draft,
            line_ids=[self.new_id() for _ in draft.items],
            currency=state.settings.currency,
        )
        invoice = self._with_tax(state, invoice)

        products = self._release(state.products, invoice_id)
        products = self._allocate(products, invoice)

        if previous is None:
            invoices = state.invoices + (invoice,)
        else:
            invoices = tuple(
                invoice if i.id == invoice_id else i for i in state.invoices
            )

        logger.info(
            "invoice_updated",
            invoice_id=invoice_id,
            status=invoice.status.value,
            lines=len(invoice.items),
        )
        return replace(state, products=products, invoices=invoices), invoice

    def delete_invoice(self, state: LedgerState, invoice_id: str) -> LedgerState:
        """Revert the invoice's allocations and drop it.  Unknown ids are a no-op."""
        if state.invoice(invoice_id) is None:
            logger.debug("invoice_delete_unknown_id", invoice_id=invoice_id)
            return state

        logger.info("invoice_deleted", invoice_id=invoice_id)
        return replace(
            state,
            products=self._release(state.products, invoice_id),
            invoices=tuple(i for i in state.invoices if i.id != invoice_id),
        )

    # --- Products ---------------------------------------------------------------

    def add_product(
        self, state: LedgerState, product: Product
    ) -> tuple[LedgerState, Product]:
        """Append *product*; a new product never carries allocations."""
        if not product.name or not product.name.strip():
            raise ValidationError("Product name is required")
        if state.product_by_name(product.name) is not None:
            raise ValidationError(f"Product '{product.name}' already exists")

        product = replace(
            product,
            id=product.id or self.new_id(),
            name=product.name.strip(),
            sales=(),
        )
        logger.info("product_added", product_id=product.id, name=product.name)
        return replace(state, products=state.products + (product,)), product

    def update_product(self, state: LedgerState, product: Product) -> LedgerState:
        """Replace catalogue fields; allocations always come from the stored copy."""
        current = state.product(product.id)
        if current is None:
            raise EntityNotFoundError(f"Product with ID '{product.id}' not found")
        product = replace(product, sales=current.sales)
        return replace(
            state,
            products=tuple(product if p.id == product.id else p for p in state.products),
        )

    def delete_product(self, state: LedgerState, product_id: str) -> LedgerState:
        """Remove the product and strip its lines from every invoice."""
        if state.product(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        invoices = tuple(
            self._with_tax(state, invoice.without_product(product_id))
            if any(line.product_id == product_id for line in invoice.items)
            else invoice
            for invoice in state.invoices
        )
        logger.info("product_deleted", product_id=product_id)
        return replace(
            state,
            products=tuple(p for p in state.products if p.id != product_id),
            invoices=invoices,
        )

    # --- Purchases --------------------------------------------------------------

    def add_purchase_order(
        self, state: LedgerState, order: PurchaseOrder
    ) -> LedgerState:
        logger.info("purchase_order_added", order_id=order.id, po_number=order.po_number)
        return replace(state, purchase_orders=state.purchase_orders + (order,))

    def update_purchase_order(
        self, state: LedgerState, order: PurchaseOrder
    ) -> LedgerState:
        if state.purchase_order(order.id) is None:
            raise EntityNotFoundError(f"Purchase order '{order.id}' not found")
        logger.info("purchase_order_updated", order_id=order.id, status=order.status.value)
        return replace(
            state,
            purchase_orders=tuple(
                order if o.id == order.id else o for o in state.purchase_orders
            ),
        )

    def delete_purchase_order(self, state: LedgerState, order_id: str) -> LedgerState:
        """Drop the order.  Unknown ids are a no-op.

        Entries already received against the order stay, so stock is unchanged.
        """
        if state.purchase_order(order_id) is None:
            logger.debug("purchase_order_delete_unknown_id", order_id=order_id)
            return state

        logger.info("purchase_order_deleted", order_id=order_id)
        return replace(
            state,
            purchase_orders=tuple(o for o in state.purchase_orders if o.id != order_id),
        )

    def add_purchase_entry(
        self, state: LedgerState, entry: PurchaseEntry
    ) -> LedgerState:
        """Record goods received and advance the linked purchase order, if any."""
        orders = state.purchase_orders
        if entry.purchase_order_id:
            if state.purchase_order(entry.purchase_order_id) is None:
                logger.warning(
                    "purchase_entry_unknown_order",
                    entry_id=entry.id,
                    purchase_order_id=entry.purchase_order_id,
                )
            else:
                orders = tuple(
                    o.receive(entry) if o.id == entry.purchase_order_id else o
                    for o in orders
                )
        logger.info(
            "purchase_entry_added",
            entry_id=entry.id,
            status=entry.status.value,
            lines=len(entry.items),
        )
        return replace(
            state,
            purchase_entries=state.purchase_entries + (entry,),
            purchase_orders=orders,
        )

    # --- Internal helpers -------------------------------------------------------

    def _check_products(self, state: LedgerState, product_ids) -> None:
        if self._policy.on_unknown_product != UnknownProductPolicy.REJECT:
            return
        for product_id in product_ids:
            if state.product(product_id) is None:
                raise UnknownProductError(product_id)

    def _allocations_for(self, invoice: Invoice) -> dict[str, int]:
        if self._policy.release_cancelled and invoice.status == InvoiceStatus.CANCELLED:
            return {}
        return invoice.quantities_by_product()

    def _allocate(
        self, products: tuple[Product, ...], invoice: Invoice
    ) -> tuple[Product, ...]:
        wanted = self._allocations_for(invoice)
        known = {p.id for p in products}
        for product_id in wanted:
            if product_id not in known:
                logger.warning(
                    "allocation_skipped_unknown_product",
                    invoice_id=invoice.id,
                    product_id=product_id,
                )
        return tuple(
            p.allocate(invoice.id, wanted[p.id]) if p.id in wanted else p
            for p in products
        )

    @staticmethod
    def _movement(
        state: LedgerState,
        when,
        product_id: str,
        details: str,
        quantity: int,
        direction: MovementDirection,
    ) -> StockMovement:
        product = state.product(product_id)
        unit = state.unit(product.unit_id) if product else None
        return StockMovement(
            date=when,
            product_id=product_id,
            product_name=product.name if product else "N/A",
            details=details,
            quantity=quantity,
            unit_name=unit.name if unit else "N/A",
            direction=direction,
        )

    @staticmethod
    def _release(products: tuple[Product, ...], invoice_id: str) -> tuple[Product, ...]:
        return tuple(p.release(invoice_id) for p in products)

    @staticmethod
    def _with_tax(state: LedgerState, invoice: Invoice) -> Invoice:
        tax = state.settings.find_tax(invoice.tax_id)
        if tax is None:
            return replace(invoice, tax_amount=Money.zero(invoice.currency))
        return replace(invoice, tax_amount=invoice.subtotal.percent(tax.rate))
