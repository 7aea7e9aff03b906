"""Application service: Receive Purchase (purchase entry) use case.

Records goods received, optionally against a purchase order whose
received quantities and status advance accordingly.  Only completed
entries count towards available stock.
"""

from __future__ import annotations

from datetime import date

from stockbook.application.dto import PurchaseItemSpec
from stockbook.application.purchase_input import (
    resolve_product,
    resolve_purchase_order,
    resolve_supplier,
)
from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.purchase import (
    PurchaseEntry,
    PurchaseEntryStatus,
    ReceivedItem,
)
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class ReceivePurchaseHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        entry_date: date,
        items: list[PurchaseItemSpec] | None = None,
        supplier: str | None = None,
        purchase_order: str | None = None,
        draft: bool = False,
        notes: str | None = None,
    ) -> PurchaseEntry:
        """Record a purchase entry.

        With ``purchase_order`` (ID or PO number) and no ``items``, every
        outstanding quantity on the order is received.
        """
        state = self._ledger_repo.load()

        order = None
        if purchase_order is not None:
            order = resolve_purchase_order(state, purchase_order)

        if order is not None:
            supplier_id = order.supplier_id
        elif supplier is not None:
            supplier_id = resolve_supplier(state, supplier).id
        else:
            raise ValidationError("A supplier or a purchase order is required")

        if items:
            received = tuple(
                ReceivedItem(resolve_product(state, spec.product).id, spec.quantity)
                for spec in items
            )
        elif order is not None:
            received = tuple(
                ReceivedItem(i.product_id, i.remaining_quantity)
                for i in order.items
                if i.remaining_quantity > 0
            )
        else:
            received = ()
        if not received:
            raise ValidationError("Nothing to receive")

        entry = PurchaseEntry(
            id=self._ledger.new_id(),
            entry_date=entry_date,
            supplier_id=supplier_id,
            items=received,
            status=PurchaseEntryStatus.DRAFT if draft else PurchaseEntryStatus.COMPLETED,
            purchase_order_id=order.id if order else None,
            notes=notes,
        )
        self._ledger_repo.save(self._ledger.add_purchase_entry(state, entry))
        return entry
