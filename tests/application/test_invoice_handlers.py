"""Integration tests for the invoice use cases.

Uses the in-memory ledger repository, no file I/O.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from stockbook.application.add_invoice import AddInvoiceHandler
from stockbook.application.change_invoice_status import ChangeInvoiceStatusHandler
from stockbook.application.delete_invoice import DeleteInvoiceHandler
from stockbook.application.dto import InvoiceItemSpec, InvoiceSpec
from stockbook.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from stockbook.application.update_invoice import UpdateInvoiceHandler
from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.product import Allocation, Product
from stockbook.domain.model.purchase import PurchaseEntry, ReceivedItem
from stockbook.domain.model.reference import AppSettings, Tax
from stockbook.domain.model.value_objects import Money
from stockbook.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeLedgerRepository, sequential_ids


def _setup() -> tuple[FakeLedgerRepository, StockLedger]:
    state = LedgerState(
        products=(
            Product(id="p1", name="Widget", price=Money.of("15.00"), unit_id="u1"),
            Product(id="p2", name="Gadget", price=Money.of("25.00"), unit_id="u1"),
        ),
        purchase_entries=(
            PurchaseEntry(
                id="e1", entry_date=date(2024, 1, 1), supplier_id="s1",
                items=(ReceivedItem("p1", 100), ReceivedItem("p2", 10)),
            ),
        ),
    )
    return FakeLedgerRepository(state), StockLedger(id_factory=sequential_ids("x"))


def _spec(*items: InvoiceItemSpec, number="INV-1", status="Draft") -> InvoiceSpec:
    return InvoiceSpec(
        invoice_number=number,
        client_name="Alice",
        invoice_date=date(2024, 6, 1),
        due_date=date(2024, 6, 30),
        items=list(items),
        status=status,
    )


class TestAddInvoice:

    def test_creates_invoice_with_catalogue_prices(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(
            _spec(InvoiceItemSpec("Widget", 3), InvoiceItemSpec("p2", 1))
        )
        assert dto.total == "$70.00"
        assert dto.status == "Draft"
        assert [line.product_name for line in dto.items] == ["Widget", "Gadget"]
        assert dto.items[0].description == "Widget"

    def test_persists_invoice_and_allocation_together(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 3)))

        assert repo.save_count == 1
        assert repo.state.invoice(dto.id) is not None
        assert repo.state.product("p1").sales == (Allocation(dto.id, 3),)

    def test_explicit_price_overrides_catalogue(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(
            _spec(InvoiceItemSpec("Widget", 2, price="9.99"))
        )
        assert dto.total == "$19.98"

    def test_unknown_product_needs_a_price(self):
        repo, ledger = _setup()
        with pytest.raises(ValidationError, match="Price is required"):
            AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Mystery", 1)))
        assert repo.save_count == 0

    def test_unknown_product_with_price_is_recorded_without_stock(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(
            _spec(InvoiceItemSpec("Consulting", 2, price="50"))
        )
        assert dto.items[0].product_name == "N/A"
        assert all(p.sales == () for p in repo.state.products)

    def test_bad_status_rejected(self):
        repo, ledger = _setup()
        with pytest.raises(ValidationError, match="Unknown invoice status"):
            AddInvoiceHandler(repo, ledger).handle(
                _spec(InvoiceItemSpec("Widget", 1), status="Overdue")
            )

    def test_header_defaults(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(InvoiceSpec(
            invoice_number="INV-9", client_name="Bob", items=[InvoiceItemSpec("Widget", 1)],
        ))

        assert dto.status == "Draft"
        assert dto.invoice_date == dto.due_date == date.today().isoformat()
        assert repo.state.invoice(dto.id).client_email == ""

    def test_no_tax_line_without_a_tax(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 3)))
        assert dto.tax == ""
        assert dto.total == "$45.00"

    def test_tax_is_shown(self):
        repo, ledger = _setup()
        repo.state = replace(
            repo.state, settings=AppSettings(taxes=(Tax("t1", "VAT", Decimal("10")),))
        )
        dto = AddInvoiceHandler(repo, ledger).handle(InvoiceSpec(
            invoice_number="INV-1",
            client_name="Alice",
            items=[InvoiceItemSpec("Widget", 3)],
            tax_id="t1",
        ))
        assert dto.tax == "$4.50"
        assert dto.total == "$49.50"


class TestUpdateInvoice:

    def test_replaces_quantities(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 3)))

        UpdateInvoiceHandler(repo, ledger).handle(
            dto.id, _spec(InvoiceItemSpec("Widget", 1), InvoiceItemSpec("Gadget", 2))
        )

        assert ledger.available_stock(repo.state, "p1") == 99
        assert ledger.available_stock(repo.state, "p2") == 8

    def test_unset_fields_keep_stored_values(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 3)))
        ChangeInvoiceStatusHandler(repo, ledger).handle(dto.id, "Cancelled")

        result = UpdateInvoiceHandler(repo, ledger).handle(dto.id, InvoiceSpec(
            invoice_number="INV-1",
            client_name="Alice",
            items=[InvoiceItemSpec("Widget", 3)],
            notes="typo fix",
        ))

        assert result.status == "Cancelled"
        assert result.invoice_date == "2024-06-01"
        assert result.due_date == "2024-06-30"
        assert repo.state.invoice(dto.id).notes == "typo fix"
        assert ledger.available_stock(repo.state, "p1") == 100

    def test_later_date_moves_stale_due_date(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 3)))

        result = UpdateInvoiceHandler(repo, ledger).handle(dto.id, InvoiceSpec(
            invoice_number="INV-1",
            client_name="Alice",
            items=[InvoiceItemSpec("Widget", 3)],
            invoice_date=date(2024, 7, 15),
        ))

        assert result.invoice_date == "2024-07-15"
        assert result.due_date == "2024-07-15"


class TestChangeInvoiceStatus:

    def test_cancel_releases_and_keeps_lines(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 30)))
        line_id = repo.state.invoice(dto.id).items[0].id

        result = ChangeInvoiceStatusHandler(repo, ledger).handle(dto.id, "cancelled")

        assert result.status == "Cancelled"
        assert ledger.available_stock(repo.state, "p1") == 100
        assert repo.state.invoice(dto.id).items[0].id == line_id

    def test_mark_paid_keeps_allocation(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 30)))

        ChangeInvoiceStatusHandler(repo, ledger).handle(dto.id, "Paid")

        assert ledger.available_stock(repo.state, "p1") == 70

    def test_unknown_invoice(self):
        repo, ledger = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ChangeInvoiceStatusHandler(repo, ledger).handle("nope", "Paid")


class TestDeleteInvoice:

    def test_delete_reverts_stock(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(_spec(InvoiceItemSpec("Widget", 5)))

        assert DeleteInvoiceHandler(repo, ledger).handle(dto.id) is True
        assert ledger.available_stock(repo.state, "p1") == 100
        assert repo.state.invoices == ()

    def test_delete_unknown_writes_nothing(self):
        repo, ledger = _setup()
        assert DeleteInvoiceHandler(repo, ledger).handle("nope") is False
        assert repo.save_count == 0


class TestShowInvoices:

    def test_show_by_number(self):
        repo, ledger = _setup()
        dto = AddInvoiceHandler(repo, ledger).handle(
            _spec(InvoiceItemSpec("Widget", 1), number="INV-42")
        )
        assert ShowInvoiceHandler(repo).handle("INV-42").id == dto.id

    def test_show_missing(self):
        repo, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowInvoiceHandler(repo).handle("INV-404")

    def test_list(self):
        repo, ledger = _setup()
        handler = AddInvoiceHandler(repo, ledger)
        handler.handle(_spec(InvoiceItemSpec("Widget", 1)))
        handler.handle(_spec(InvoiceItemSpec("Gadget", 1), number="INV-2"))
        assert [i.invoice_number for i in ListInvoicesHandler(repo).handle()] == [
            "INV-1", "INV-2",
        ]
