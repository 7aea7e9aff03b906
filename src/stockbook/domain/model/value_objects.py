"""Money, quantities and discounts.

Immutable values compared by content.  Construction validates, so an
invoice line can never hold a negative price or a zero quantity.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from stockbook.domain.exceptions import ValidationError

_CENT = Decimal("0.01")
_ZERO = Decimal("0")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹ ",
}


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount tagged with an ISO currency code.

    Amounts from different currencies never mix; there is no conversion.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, not {type(self.amount).__name__}"
            )
        if self.amount < _ZERO:
            raise ValidationError(f"Money amount cannot be negative ({self.amount})")

    def __add__(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._check_currency(other)
        if other.amount > self.amount:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by an int quantity, not {quantity!r}")
        return Money(self.amount * quantity, self.currency)

    def percent(self, rate: Decimal) -> Money:
        """*rate* percent of this amount, rounded half-up to the cent."""
        value = (self.amount * rate / Decimal("100")).quantize(_CENT, ROUND_HALF_UP)
        return Money(value, self.currency)

    def in_currency(self, currency: str) -> Money:
        """Relabel the amount; no conversion happens."""
        return Money(self.amount, currency)

    def __str__(self) -> str:
        symbol = CURRENCY_SYMBOLS.get(self.currency)
        if symbol is None:
            return f"{self.amount:.2f} {self.currency}"
        return f"{symbol}{self.amount:,.2f}"

    def _check_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Build from user input such as ``"12.50"``."""
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(_ZERO, currency)


@dataclass(frozen=True)
class Quantity:
    """Guard for line quantities: a whole number above zero."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, not {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")


class DiscountType(Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class Discount:
    """A fixed-amount or percentage reduction carried on an invoice line."""

    type: DiscountType
    value: Decimal

    def __post_init__(self) -> None:
        if self.value < _ZERO:
            raise ValidationError("Discount value cannot be negative")
        if self.type == DiscountType.PERCENTAGE and self.value > Decimal("100"):
            raise ValidationError("Percentage discount cannot exceed 100")
