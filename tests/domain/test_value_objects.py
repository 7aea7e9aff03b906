"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from stockbook.domain.exceptions import ValidationError
from stockbook.domain.model.value_objects import Discount, DiscountType, Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_percent_rounds_half_up_to_the_cent(self):
        assert Money.of("10.05").percent(Decimal("50")) == Money.of("5.03")

    def test_str_uses_currency_symbol(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("1234.5", "EUR")) == "€1,234.50"
        assert str(Money.of("3", "INR")) == "₹ 3.00"

    def test_str_falls_back_to_code(self):
        assert str(Money.of("3", "CHF")) == "3.00 CHF"

    def test_relabel_keeps_amount(self):
        assert Money.of("3").in_currency("GBP") == Money.of("3", "GBP")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_fraction_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── Discount ─────────────────────────────────────────────────────────────────


class TestDiscount:

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Discount(DiscountType.FIXED, Decimal("-1"))

    def test_percentage_over_hundred_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            Discount(DiscountType.PERCENTAGE, Decimal("120"))
