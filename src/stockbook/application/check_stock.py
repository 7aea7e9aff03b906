"""Application service: Check Stock use case (diagnostic query)."""

from __future__ import annotations

from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class CheckStockHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(self) -> list[str]:
        """Return a description of every inconsistent allocation (empty if none)."""
        return self._ledger.check_consistency(self._ledger_repo.load())
