"""Application service: Add Product use case."""

from __future__ import annotations

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.product import Product
from stockbook.domain.model.value_objects import Money
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service.stock_ledger import StockLedger


class AddProductHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger

    def handle(
        self,
        name: str,
        price: str,
        unit: str,
        category: str | None = None,
        threshold: int | None = None,
    ) -> Product:
        """Add a new product to the catalogue.

        ``unit`` and ``category`` may be given by ID or by name and must
        already exist.
        """
        state = self._ledger_repo.load()

        unit_obj = state.unit(unit) or next(
            (u for u in state.units if u.name.lower() == unit.lower()), None
        )
        if unit_obj is None:
            raise EntityNotFoundError(f"Unit not found: '{unit}'")

        category_id = None
        if category is not None:
            category_obj = state.category(category) or next(
                (c for c in state.categories if c.name.lower() == category.lower()),
                None,
            )
            if category_obj is None:
                raise EntityNotFoundError(f"Category not found: '{category}'")
            category_id = category_obj.id

        if threshold is not None and threshold < 0:
            raise ValidationError("Low-stock threshold cannot be negative")

        price_money = Money.of(price, state.settings.currency)
        if price_money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        new_state, product = self._ledger.add_product(
            state,
            Product(
                id="",
                name=name,
                price=price_money,
                unit_id=unit_obj.id,
                category_id=category_id,
                threshold_value=threshold,
            ),
        )
        self._ledger_repo.save(new_state)
        return product
