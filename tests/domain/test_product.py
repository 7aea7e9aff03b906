"""Unit tests for the Product aggregate's allocation list."""

import pytest

from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.product import Allocation, Product
from stockbook.domain.model.value_objects import Money


def _product(**kw) -> Product:
    return Product(id="p1", name="Widget", price=Money.of("10"), unit_id="u1", **kw)


class TestAllocations:

    def test_allocate_appends(self):
        p = _product().allocate("inv1", 3)
        assert p.sales == (Allocation("inv1", 3),)

    def test_allocate_same_invoice_replaces(self):
        p = _product().allocate("inv1", 3).allocate("inv1", 5)
        assert p.sales == (Allocation("inv1", 5),)

    def test_release(self):
        p = _product().allocate("inv1", 3).allocate("inv2", 4).release("inv1")
        assert p.sales == (Allocation("inv2", 4),)

    def test_release_unknown_returns_same_product(self):
        p = _product().allocate("inv1", 3)
        assert p.release("nope") is p

    def test_allocated_quantity_with_exclusion(self):
        p = _product().allocate("inv1", 3).allocate("inv2", 4)
        assert p.allocated_quantity() == 7
        assert p.allocated_quantity(exclude_invoice_id="inv2") == 3

    def test_text_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Allocation("inv1", "5")

    def test_allocate_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _product().allocate("inv1", 0)


class TestCatalogueFields:

    def test_update_price(self):
        assert _product().update_price(Money.of("12")).price == Money.of("12")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_price(Money.zero())

    def test_low_stock_at_threshold(self):
        p = _product(threshold_value=5)
        assert p.is_low_stock(5)
        assert not p.is_low_stock(6)

    def test_no_threshold_never_low(self):
        assert not _product().is_low_stock(-10)
        assert not _product(threshold_value=0).is_low_stock(0)
