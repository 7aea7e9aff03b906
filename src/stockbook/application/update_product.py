"""Application service: Update Product use case."""

from __future__ import annotations

from dataclasses import replace

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.product import Product
from stockbook.domain.model.value_objects import Money
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class UpdateProductHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        threshold: int | None = None,
    ) -> Product:
        """Update a product's price and/or low-stock threshold.

        Existing invoices keep the price captured on each line.
        """
        state = self._ledger_repo.load()
        product = state.product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product = product.update_price(Money.of(new_price, product.price.currency))
        if threshold is not None:
            if threshold < 0:
                raise ValidationError("Low-stock threshold cannot be negative")
            product = replace(product, threshold_value=threshold or None)

        new_state = self._ledger.update_product(state, product)
        self._ledger_repo.save(new_state)
        return new_state.product(product_id)
