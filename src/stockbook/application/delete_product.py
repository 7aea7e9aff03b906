"""Application service: Delete Product use case.

The product's lines are removed from every invoice as well.
"""

from __future__ import annotations

from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class DeleteProductHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self, product_id: str) -> None:
        state = self._ledger_repo.load()
        self._ledger_repo.save(self._ledger.delete_product(state, product_id))
