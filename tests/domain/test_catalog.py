"""Unit tests for reference-data operations."""

from decimal import Decimal

import pytest

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.reference import Category, Supplier, Tax, Unit
from stockbook.domain.service import catalog


class TestUnitsAndCategories:

    def test_add_unit(self):
        state = catalog.add_unit(LedgerState(), Unit.create("u1", " kg "))
        assert state.unit("u1").name == "kg"

    def test_duplicate_name_rejected_case_insensitively(self):
        state = catalog.add_category(LedgerState(), Category("c1", "Tools"))
        with pytest.raises(ValidationError, match="already exists"):
            catalog.add_category(state, Category("c2", "tools"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Unit name is required"):
            Unit.create("u1", " ")

    def test_rename_category(self):
        state = catalog.add_category(LedgerState(), Category("c1", "Tools"))
        state = catalog.update_category(state, Category("c1", "Hand tools"))
        assert state.category("c1").name == "Hand tools"

    def test_rename_missing_category(self):
        with pytest.raises(EntityNotFoundError, match="Category with ID 'c9'"):
            catalog.update_category(LedgerState(), Category("c9", "Nope"))

    def test_delete_only_touches_categories(self):
        start = catalog.add_category(LedgerState(), Category("c1", "Tools"))
        state = catalog.delete_category(start, "c1")
        assert state.categories == ()
        assert state.changed_collections(start) == ["categories"]


class TestSuppliers:

    def test_update_contact_details(self):
        state = catalog.add_supplier(LedgerState(), Supplier.create("s1", "Bolt"))
        state = catalog.update_supplier(state, Supplier("s1", "Bolt", phone="555-0101"))
        assert state.supplier("s1").phone == "555-0101"

    def test_delete_supplier(self):
        state = catalog.add_supplier(LedgerState(), Supplier.create("s1", "Bolt"))
        assert catalog.delete_supplier(state, "s1").suppliers == ()


class TestTaxes:

    def test_taxes_live_in_settings(self):
        state = catalog.add_tax(LedgerState(), Tax.create("t1", "VAT", Decimal("20")))
        assert state.settings.find_tax("t1").rate == Decimal("20")

    def test_rate_range(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            Tax.create("t1", "VAT", Decimal("101"))

    def test_update_and_delete(self):
        state = catalog.add_tax(LedgerState(), Tax.create("t1", "VAT", Decimal("20")))
        state = catalog.update_tax(state, Tax("t1", "VAT", Decimal("21")))
        assert state.settings.find_tax("t1").rate == Decimal("21")
        assert catalog.delete_tax(state, "t1").settings.taxes == ()


class TestSettings:

    def test_currency_is_normalised(self):
        state = catalog.update_settings(LedgerState(), currency=" eur ")
        assert state.settings.currency == "EUR"

    def test_bad_currency_rejected(self):
        with pytest.raises(ValidationError, match="Invalid currency"):
            catalog.update_settings(LedgerState(), currency="EURO")

    def test_unknown_setting_rejected(self):
        with pytest.raises(ValidationError, match="Unknown setting"):
            catalog.update_settings(LedgerState(), colour="blue")

    def test_taxes_cannot_be_set_directly(self):
        with pytest.raises(ValidationError, match="tax operations"):
            catalog.update_settings(LedgerState(), taxes=())
