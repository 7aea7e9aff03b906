"""Application service: Show Stock use cases (queries)."""

from __future__ import annotations

from stockbook.application.dto import StockLineDTO
from stockbook.domain.exceptions import EntityNotFoundError
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class ShowStockHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, low_only: bool = False) -> list[StockLineDTO]:
        state = self._ledger_repo.load()
        return [
            StockLineDTO(
                product_id=level.product_id,
                product_name=level.product_name,
                received=level.received,
                allocated=level.allocated,
                available=level.available,
                threshold=level.threshold_value,
                low=level.is_low,
            )
            for level in self._ledger.stock_levels(state)
            if level.is_low or not low_only
        ]


class AvailableStockHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, product_ref: str, exclude_invoice_id: str | None = None) -> int:
        """Available quantity for a product given by ID or name."""
        state = self._ledger_repo.load()
        product = state.product(product_ref) or state.product_by_name(product_ref)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_ref}'")
        return self._ledger.available_stock(state, product.id, exclude_invoice_id)
