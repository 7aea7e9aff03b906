"""Application service: Update Purchase Order use case.

Only the order's header can change: expected delivery date, notes and
status.  Lines and received quantities follow from purchase entries.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from stockbook.application.purchase_input import (
    parse_order_status,
    resolve_purchase_order,
)
from stockbook.domain.model.purchase import PurchaseOrder
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class UpdatePurchaseOrderHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        order_ref: str,
        expected_delivery_date: date | None = None,
        notes: str | None = None,
        status: str | None = None,
    ) -> PurchaseOrder:
        """Apply the given changes; arguments left as None keep their value."""
        state = self._ledger_repo.load()
        order = resolve_purchase_order(state, order_ref)

        changes = {}
        if expected_delivery_date is not None:
            changes["expected_delivery_date"] = expected_delivery_date
        if notes is not None:
            changes["notes"] = notes
        if status is not None:
            changes["status"] = parse_order_status(status)
        if not changes:
            return order

        updated = replace(order, **changes)
        self._ledger_repo.save(self._ledger.update_purchase_order(state, updated))
        return updated
