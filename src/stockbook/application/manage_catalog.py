"""Application services: reference data (units, categories, suppliers, taxes).

Each handler loads the snapshot, applies one catalogue operation and
saves.  These never touch stock.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, InvalidOperation

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.reference import Category, Supplier, Tax, Unit
from stockbook.domain.repository.ledger_repository import LedgerRepository
from stockbook.domain.service import catalog
from stockbook.domain.service.stock_ledger import StockLedger


class _CatalogHandler:

    def __init__(self, ledger_repo: LedgerRepository, ledger: StockLedger) -> None:
        self._ledger_repo = ledger_repo
        self._ledger = ledger


class AddUnitHandler(_CatalogHandler):

    def handle(self, name: str) -> Unit:
        state = self._ledger_repo.load()
        unit = Unit.create(self._ledger.new_id(), name)
        self._ledger_repo.save(catalog.add_unit(state, unit))
        return unit


class AddCategoryHandler(_CatalogHandler):

    def handle(self, name: str) -> Category:
        state = self._ledger_repo.load()
        category = Category.create(self._ledger.new_id(), name)
        self._ledger_repo.save(catalog.add_category(state, category))
        return category


class RenameCategoryHandler(_CatalogHandler):

    def handle(self, category_id: str, name: str) -> Category:
        state = self._ledger_repo.load()
        category = Category.create(category_id, name)
        self._ledger_repo.save(catalog.update_category(state, category))
        return category


class DeleteCategoryHandler(_CatalogHandler):

    def handle(self, category_id: str) -> None:
        state = self._ledger_repo.load()
        self._ledger_repo.save(catalog.delete_category(state, category_id))


class AddSupplierHandler(_CatalogHandler):

    def handle(
        self, name: str, email: str = "", phone: str = "", address: str = ""
    ) -> Supplier:
        state = self._ledger_repo.load()
        supplier = Supplier.create(
            self._ledger.new_id(), name, email=email, phone=phone, address=address
        )
        self._ledger_repo.save(catalog.add_supplier(state, supplier))
        return supplier


class UpdateSupplierHandler(_CatalogHandler):

    def handle(self, supplier_id: str, **contact: str | None) -> Supplier:
        """Change any of ``name``, ``email``, ``phone``, ``address``."""
        state = self._ledger_repo.load()
        supplier = state.supplier(supplier_id)
        if supplier is None:
            raise EntityNotFoundError(f"Supplier with ID '{supplier_id}' not found")
        changes = {k: v for k, v in contact.items() if v is not None}
        supplier = replace(supplier, **changes)
        self._ledger_repo.save(catalog.update_supplier(state, supplier))
        return supplier


class DeleteSupplierHandler(_CatalogHandler):

    def handle(self, supplier_id: str) -> None:
        state = self._ledger_repo.load()
        self._ledger_repo.save(catalog.delete_supplier(state, supplier_id))


class AddTaxHandler(_CatalogHandler):

    def handle(self, name: str, rate: str) -> Tax:
        state = self._ledger_repo.load()
        tax = Tax.create(self._ledger.new_id(), name, _parse_rate(rate))
        self._ledger_repo.save(catalog.add_tax(state, tax))
        return tax


class UpdateTaxHandler(_CatalogHandler):

    def handle(self, tax_id: str, name: str, rate: str) -> Tax:
        state = self._ledger_repo.load()
        tax = Tax.create(tax_id, name, _parse_rate(rate))
        self._ledger_repo.save(catalog.update_tax(state, tax))
        return tax


class DeleteTaxHandler(_CatalogHandler):

    def handle(self, tax_id: str) -> None:
        state = self._ledger_repo.load()
        self._ledger_repo.save(catalog.delete_tax(state, tax_id))


def _parse_rate(rate: str) -> Decimal:
    try:
        return Decimal(rate)
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid tax rate: {rate!r}") from exc
