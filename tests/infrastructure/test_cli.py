"""End-to-end tests for the click CLI against a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from stockbook.config import reset_settings
from stockbook.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKBOOK_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    runner = CliRunner()

    def _run(*args: str, ok: bool = True):
        result = runner.invoke(cli, list(args))
        if ok:
            assert result.exit_code == 0, result.output
        return result

    yield _run
    reset_settings()


@pytest.fixture
def stocked(run):
    run("unit", "add", "--name", "pcs")
    run("product", "add", "--name", "Widget", "--price", "15.00", "--unit", "pcs",
        "--threshold", "80")
    run("product", "add", "--name", "Gadget", "--price", "25.00", "--unit", "pcs")
    run("supplier", "add", "--name", "Bolt Supply")
    run("purchase", "receive", "--supplier", "Bolt Supply",
        "--items", "Widget:100,Gadget:10", "--date", "2024-01-01")
    return run


def _invoice_id(output: str) -> str:
    return re.search(r"created\s+\(id=(\w+)\)", output).group(1)


class TestInvoiceCommands:

    def test_create_allocates_stock(self, stocked):
        result = stocked(
            "invoice", "create", "--number", "INV-1", "--client", "Alice",
            "--items", "Widget:20,Gadget:1@30", "--date", "2024-02-01",
        )
        assert "Invoice INV-1 created" in result.output
        assert "$330.00" in result.output
        assert stocked("stock", "available", "--product", "Widget").output.strip() == "80"

    def test_available_excluding_invoice(self, stocked):
        first = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                        "--items", "Widget:20")
        stocked("invoice", "create", "--number", "INV-2", "--client", "B",
                "--items", "Widget:15")
        invoice_id = _invoice_id(first.output)

        assert stocked("stock", "available", "--product", "Widget").output.strip() == "65"
        excluded = stocked("stock", "available", "--product", "Widget",
                           "--exclude-invoice", invoice_id)
        assert excluded.output.strip() == "85"

    def test_update_then_delete(self, stocked):
        created = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                          "--items", "Widget:3")
        invoice_id = _invoice_id(created.output)

        stocked("invoice", "update", "--id", invoice_id, "--number", "INV-1",
                "--client", "A", "--items", "Widget:1,Gadget:2")
        assert stocked("stock", "available", "--product", "Widget").output.strip() == "99"
        assert stocked("stock", "available", "--product", "Gadget").output.strip() == "8"

        assert "deleted" in stocked("invoice", "delete", "--id", invoice_id).output
        assert "nothing to delete" in stocked("invoice", "delete", "--id", invoice_id).output
        assert stocked("stock", "available", "--product", "Widget").output.strip() == "100"

    def test_cancel_via_status(self, stocked):
        created = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                          "--items", "Widget:30")
        invoice_id = _invoice_id(created.output)

        result = stocked("invoice", "status", "--id", invoice_id, "cancelled")

        assert "is now Cancelled" in result.output
        assert stocked("stock", "available", "--product", "Widget").output.strip() == "100"

    def test_notes_edit_keeps_cancelled_invoice_closed(self, stocked):
        created = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                          "--items", "Widget:3", "--date", "2024-01-01")
        invoice_id = _invoice_id(created.output)
        stocked("invoice", "status", "--id", invoice_id, "Cancelled")

        result = stocked("invoice", "update", "--id", invoice_id, "--number", "INV-1",
                         "--client", "A", "--items", "Widget:3", "--notes", "typo fix")

        assert "status=Cancelled" in result.output
        assert "Dated:    2024-01-01" in result.output
        assert stocked("stock", "available", "--product", "Widget").output.strip() == "100"

    def test_untaxed_invoice_has_no_tax_line(self, stocked):
        created = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                          "--items", "Widget:2")
        assert "Tax" not in created.output
        assert "$30.00" in created.output

    def test_bad_item_format(self, stocked):
        result = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                         "--items", "Widget", ok=False)
        assert result.exit_code != 0
        assert "Invalid item format" in result.output

    def test_due_before_date_is_reported(self, stocked):
        result = stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                         "--items", "Widget:1", "--date", "2024-02-10",
                         "--due", "2024-02-01", ok=False)
        assert result.exit_code == 1
        assert "Due date cannot be before" in result.output


class TestStockCommands:

    def test_low_stock_listing(self, stocked):
        stocked("invoice", "create", "--number", "INV-1", "--client", "A",
                "--items", "Widget:25")
        result = stocked("stock", "low")
        assert "Running low" in result.output
        assert "Widget" in result.output
        assert "Gadget" not in result.output

    def test_movements_and_check(self, stocked):
        stocked("invoice", "create", "--number", "INV-9", "--client", "A",
                "--items", "Widget:2", "--date", "2024-03-01")
        movements = stocked("stock", "movements", "--direction", "out").output
        assert "Invoice #INV-9" in movements
        assert "Manual Entry" not in movements
        assert "consistent" in stocked("stock", "check").output

    def test_unknown_product(self, stocked):
        result = stocked("stock", "available", "--product", "Sprocket", ok=False)
        assert result.exit_code == 1
        assert "Product not found" in result.output


class TestPurchaseCommands:

    def test_order_and_receive(self, stocked):
        stocked("purchase", "order", "--number", "PO-7", "--supplier", "Bolt Supply",
                "--items", "Gadget:5@20")
        stocked("purchase", "receive", "--po", "PO-7")

        shown = stocked("purchase", "show", "--id", "PO-7").output
        assert "status=Completed" in shown
        assert stocked("stock", "available", "--product", "Gadget").output.strip() == "15"

    def test_update_and_delete_order(self, stocked):
        stocked("purchase", "order", "--number", "PO-8", "--supplier", "Bolt Supply",
                "--items", "Widget:5")

        updated = stocked("purchase", "update", "--id", "PO-8", "--expected", "2024-04-01",
                          "--notes", "call first", "--status", "cancelled")
        assert "status=Cancelled" in updated.output
        shown = stocked("purchase", "show", "--id", "PO-8").output
        assert "Expected: 2024-04-01" in shown
        assert "Notes:    call first" in shown

        assert "deleted" in stocked("purchase", "delete", "--id", "PO-8").output
        assert "nothing to delete" in stocked("purchase", "delete", "--id", "PO-8").output
        assert "No purchase orders found" in stocked("purchase", "list").output


class TestCatalogCommands:

    def test_settings_currency(self, run):
        run("settings", "set", "--currency", "eur")
        assert "EUR" in run("settings", "show").output

    def test_duplicate_unit(self, run):
        run("unit", "add", "--name", "kg")
        result = run("unit", "add", "--name", "KG", ok=False)
        assert "already exists" in result.output
