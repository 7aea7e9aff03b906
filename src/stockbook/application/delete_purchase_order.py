"""Application service: Delete Purchase Order use case.

Goods already received against the order stay in stock.  Deleting an
unknown order is not an error; nothing is written.
"""

from __future__ import annotations

from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class DeletePurchaseOrderHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, order_ref: str) -> bool:
        """Return True if an order was removed.  *order_ref* is an ID or PO number."""
        state = self._ledger_repo.load()
        order_id = next(
            (o.id for o in state.purchase_orders if order_ref in (o.id, o.po_number)),
            order_ref,
        )
        new_state = self._ledger.delete_purchase_order(state, order_id)
        if new_state is state:
            return False
        self._ledger_repo.save(new_state)
        return True
