"""Application service: Add Purchase Order use case.

A purchase order alone does not change stock; goods count once a
completed purchase entry records them.
"""

from __future__ import annotations

from datetime import date

from stockbook.application.dto import PurchaseItemSpec
from stockbook.application.purchase_input import resolve_product, resolve_supplier
from stockbook.domain.model.purchase import PurchaseOrder, PurchaseOrderItem
from stockbook.domain.model.value_objects import Money
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class AddPurchaseOrderHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        po_number: str,
        supplier: str,
        order_date: date,
        items: list[PurchaseItemSpec],
        expected_delivery_date: date | None = None,
        notes: str | None = None,
    ) -> PurchaseOrder:
        state = self._ledger_repo.load()
        supplier_obj = resolve_supplier(state, supplier)
        currency = state.settings.currency

        lines = []
        for spec in items:
            product = resolve_product(state, spec.product)
            price = (
                Money.of(spec.price, currency)
                if spec.price is not None
                else product.price.in_currency(currency)
            )
            lines.append(
                PurchaseOrderItem(product_id=product.id, quantity=spec.quantity, price=price)
            )

        order = PurchaseOrder.create(
            order_id=self._ledger.new_id(),
            po_number=po_number,
            order_date=order_date,
            supplier_id=supplier_obj.id,
            vendor_name=supplier_obj.name,
            items=lines,
            vendor_contact=supplier_obj.phone or None,
            expected_delivery_date=expected_delivery_date,
            notes=notes,
        )
        self._ledger_repo.save(self._ledger.add_purchase_order(state, order))
        return order
