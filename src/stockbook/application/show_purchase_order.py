"""Application service: Show / List Purchase Orders use cases (queries)."""

from __future__ import annotations

from stockbook.application.dto import PurchaseOrderDTO, PurchaseOrderLineDTO
from stockbook.application.purchase_input import resolve_purchase_order
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.purchase import PurchaseOrder
from stockbook.domain.repository.ledger_repository import LedgerRepository


def _to_dto(order: PurchaseOrder, state: LedgerState) -> PurchaseOrderDTO:
    def product_name(product_id: str) -> str:
        product = state.product(product_id)
        return product.name if product else "N/A"

    return PurchaseOrderDTO(
        id=order.id,
        po_number=order.po_number,
        date=order.date.isoformat(),
        supplier_name=order.vendor_name,
        status=order.status.value,
        items=[
            PurchaseOrderLineDTO(
                product_name=product_name(i.product_id),
                quantity=i.quantity,
                received=i.quantity_received,
                unit_price=str(i.price),
            )
            for i in order.items
        ],
        total=str(order.total_amount),
        expected_delivery_date=(
            order.expected_delivery_date.isoformat() if order.expected_delivery_date else ""
        ),
        notes=order.notes or "",
    )


class ShowPurchaseOrderHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self, order_ref: str) -> PurchaseOrderDTO:
        state = self._ledger_repo.load()
        return _to_dto(resolve_purchase_order(state, order_ref), state)


class ListPurchaseOrdersHandler:

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self) -> list[PurchaseOrderDTO]:
        state = self._ledger_repo.load()
        return [_to_dto(o, state) for o in state.purchase_orders]
