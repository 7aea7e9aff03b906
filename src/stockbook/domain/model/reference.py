"""Reference data: units, categories, suppliers, taxes and business settings.

The stock ledger only reads these; they are edited through their own
catalogue operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from stockbook.domain.exceptions import ValidationError


def _require_name(name: str, what: str) -> str:
    if not name or not name.strip():
        raise ValidationError(f"{what} name is required")
    return name.strip()


@dataclass(frozen=True)
class Unit:
    id: str
    name: str

    @staticmethod
    def create(unit_id: str, name: str) -> Unit:
        return Unit(id=unit_id, name=_require_name(name, "Unit"))


@dataclass(frozen=True)
class Category:
    id: str
    name: str

    @staticmethod
    def create(category_id: str, name: str) -> Category:
        return Category(id=category_id, name=_require_name(name, "Category"))


@dataclass(frozen=True)
class Supplier:
    id: str
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""

    @staticmethod
    def create(supplier_id: str, name: str, **contact: str) -> Supplier:
        return Supplier(id=supplier_id, name=_require_name(name, "Supplier"), **contact)


@dataclass(frozen=True)
class Tax:
    """A named tax rate, as a percentage of the invoice subtotal."""

    id: str
    name: str
    rate: Decimal

    @staticmethod
    def create(tax_id: str, name: str, rate: Decimal) -> Tax:
        if rate < 0 or rate > 100:
            raise ValidationError("Tax rate must be between 0 and 100")
        return Tax(id=tax_id, name=_require_name(name, "Tax"), rate=rate)


class TaxRule(Enum):
    PER_ITEM = "per-item"
    PER_BILL = "per-bill"


@dataclass(frozen=True)
class CompanyProfile:
    name: str = "Your Company"
    address: str = "123 Main St, Anytown, USA"
    phone: str = "+1 (555) 123-4567"
    tax_number: str | None = "TAX-123456789"


@dataclass(frozen=True)
class AppSettings:
    """Business settings persisted under the ``settings`` key.

    ``AppSettings()`` is the default used when nothing valid is stored.
    """

    app_name: str = "Stockbook"
    currency: str = "USD"
    company_profile: CompanyProfile = field(default_factory=CompanyProfile)
    default_tax_rule: TaxRule = TaxRule.PER_ITEM
    global_tax_percent: Decimal | None = None
    taxes: tuple[Tax, ...] = ()

    def find_tax(self, tax_id: str | None) -> Tax | None:
        if not tax_id:
            return None
        for tax in self.taxes:
            if tax.id == tax_id:
                return tax
        return None
