"""Integration tests for the product use cases."""

from datetime import date

import pytest

from stockbook.application.add_invoice import AddInvoiceHandler
from stockbook.application.add_product import AddProductHandler
from stockbook.application.delete_product import DeleteProductHandler
from stockbook.application.dto import InvoiceItemSpec, InvoiceSpec
from stockbook.application.update_product import UpdateProductHandler
from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.reference import Category, Unit
from stockbook.domain.model.value_objects import Money
from stockbook.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeLedgerRepository, sequential_ids


def _setup() -> tuple[FakeLedgerRepository, StockLedger]:
    state = LedgerState(
        units=(Unit("u1", "pcs"),),
        categories=(Category("c1", "Hardware"),),
    )
    return FakeLedgerRepository(state), StockLedger(id_factory=sequential_ids("p"))


class TestAddProduct:

    def test_resolves_unit_and_category_by_name(self):
        repo, ledger = _setup()
        product = AddProductHandler(repo, ledger).handle(
            "Widget", "12.50", unit="PCS", category="hardware", threshold=5
        )
        assert product.id == "p1"
        assert product.unit_id == "u1"
        assert product.category_id == "c1"
        assert repo.state.product("p1").threshold_value == 5

    def test_unknown_unit(self):
        repo, ledger = _setup()
        with pytest.raises(EntityNotFoundError, match="Unit not found"):
            AddProductHandler(repo, ledger).handle("Widget", "1", unit="box")

    def test_zero_price_rejected(self):
        repo, ledger = _setup()
        with pytest.raises(ValidationError, match="greater than zero"):
            AddProductHandler(repo, ledger).handle("Widget", "0", unit="u1")

    def test_duplicate_name_rejected(self):
        repo, ledger = _setup()
        handler = AddProductHandler(repo, ledger)
        handler.handle("Widget", "1", unit="u1")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("widget", "2", unit="u1")


class TestUpdateProduct:

    def test_price_change_does_not_touch_existing_invoices(self):
        repo, ledger = _setup()
        AddProductHandler(repo, ledger).handle("Widget", "10", unit="u1")
        dto = AddInvoiceHandler(repo, ledger).handle(InvoiceSpec(
            invoice_number="INV-1",
            client_name="Alice",
            invoice_date=date(2024, 1, 1),
            due_date=date(2024, 1, 1),
            items=[InvoiceItemSpec("Widget", 2)],
        ))

        product = UpdateProductHandler(repo, ledger).handle("p1", new_price="14")

        assert product.price == Money.of("14")
        assert str(repo.state.invoice(dto.id).total) == "$20.00"
        assert product.sales == repo.state.product("p1").sales != ()

    def test_zero_threshold_clears_it(self):
        repo, ledger = _setup()
        AddProductHandler(repo, ledger).handle("Widget", "10", unit="u1", threshold=4)
        product = UpdateProductHandler(repo, ledger).handle("p1", threshold=0)
        assert product.threshold_value is None

    def test_missing_product(self):
        repo, ledger = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(repo, ledger).handle("nope", new_price="1")


class TestDeleteProduct:

    def test_removes_product(self):
        repo, ledger = _setup()
        AddProductHandler(repo, ledger).handle("Widget", "10", unit="u1")
        DeleteProductHandler(repo, ledger).handle("p1")
        assert repo.state.products == ()
