"""Mapping between domain objects and JSON-compatible records.

Decimals are written as strings and dates as ISO-8601 strings.  There is
no schema version: a record that does not match the current shape makes
its whole collection fall back to the default.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from stockbook.domain.model.invoice import Invoice, InvoiceStatus, LineItem
from stockbook.domain.model.product import Allocation, Product
from stockbook.domain.model.purchase import (
    PurchaseEntry,
    PurchaseEntryStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    ReceivedItem,
)
from stockbook.domain.model.reference import (
    AppSettings,
    Category,
    CompanyProfile,
    Supplier,
    Tax,
    TaxRule,
    Unit,
)
from stockbook.domain.model.value_objects import Discount, DiscountType, Money

# --- Value objects --------------------------------------------------------------


def _money_to_raw(money: Money) -> dict:
    return {"amount": str(money.amount), "currency": money.currency}


def _money_to_domain(raw: dict) -> Money:
    return Money(Decimal(raw["amount"]), raw.get("currency", "USD"))


def _discount_to_raw(discount: Discount | None) -> dict | None:
    if discount is None:
        return None
    return {"type": discount.type.value, "value": str(discount.value)}


def _discount_to_domain(raw: dict | None) -> Discount | None:
    if raw is None:
        return None
    return Discount(DiscountType(raw["type"]), Decimal(str(raw["value"])))


def _date_to_domain(raw: str | None) -> date | None:
    return date.fromisoformat(raw) if raw else None


def _date_to_raw(value: date | None) -> str | None:
    return value.isoformat() if value else None


# --- Products -------------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": _money_to_raw(product.price),
        "unit_id": product.unit_id,
        "category_id": product.category_id,
        "threshold_value": product.threshold_value,
        "sales": [
            {"invoice_id": s.invoice_id, "quantity": s.quantity}
            for s in product.sales
        ],
    }


def product_to_domain(raw: dict) -> Product:
    return Product(
        id=raw["id"],
        name=raw["name"],
        price=_money_to_domain(raw["price"]),
        unit_id=raw["unit_id"],
        category_id=raw.get("category_id"),
        threshold_value=raw.get("threshold_value"),
        # Older records may lack ``sales`` entirely.
        sales=tuple(
            Allocation(s["invoice_id"], s["quantity"]) for s in raw.get("sales") or []
        ),
    )


# --- Invoices -------------------------------------------------------------------


def _line_to_raw(line: LineItem) -> dict:
    return {
        "id": line.id,
        "product_id": line.product_id,
        "description": line.description,
        "quantity": line.quantity,
        "price": _money_to_raw(line.price),
        "discount": _discount_to_raw(line.discount),
        "tax_percent": line.tax_percent,
    }


def _line_to_domain(raw: dict) -> LineItem:
    return LineItem(
        id=raw["id"],
        product_id=raw["product_id"],
        description=raw.get("description", ""),
        quantity=raw["quantity"],
        price=_money_to_domain(raw["price"]),
        discount=_discount_to_domain(raw.get("discount")),
        tax_percent=raw.get("tax_percent"),
    )


def invoice_to_raw(invoice: Invoice) -> dict:
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "client_name": invoice.client_name,
        "client_email": invoice.client_email,
        "client_contact": invoice.client_contact,
        "invoice_date": _date_to_raw(invoice.invoice_date),
        "due_date": _date_to_raw(invoice.due_date),
        "status": invoice.status.value,
        "currency": invoice.currency,
        "items": [_line_to_raw(line) for line in invoice.items],
        "tax_id": invoice.tax_id,
        "tax_amount": _money_to_raw(invoice.tax_amount) if invoice.tax_amount else None,
        "notes": invoice.notes,
        "payment_link": invoice.payment_link,
    }


def invoice_to_domain(raw: dict) -> Invoice:
    tax_amount = raw.get("tax_amount")
    return Invoice(
        id=raw["id"],
        invoice_number=raw["invoice_number"],
        client_name=raw["client_name"],
        client_email=raw.get("client_email", ""),
        client_contact=raw.get("client_contact"),
        invoice_date=_date_to_domain(raw["invoice_date"]),
        due_date=_date_to_domain(raw["due_date"]),
        status=InvoiceStatus(raw.get("status", InvoiceStatus.DRAFT.value)),
        currency=raw.get("currency", "USD"),
        items=tuple(_line_to_domain(i) for i in raw["items"]),
        tax_id=raw.get("tax_id"),
        tax_amount=_money_to_domain(tax_amount) if tax_amount else None,
        notes=raw.get("notes"),
        payment_link=raw.get("payment_link"),
    )


# --- Purchases ------------------------------------------------------------------


def purchase_order_to_raw(order: PurchaseOrder) -> dict:
    return {
        "id": order.id,
        "po_number": order.po_number,
        "date": _date_to_raw(order.date),
        "supplier_id": order.supplier_id,
        "vendor_name": order.vendor_name,
        "vendor_contact": order.vendor_contact,
        "expected_delivery_date": _date_to_raw(order.expected_delivery_date),
        "notes": order.notes,
        "status": order.status.value,
        "items": [
            {
                "product_id": i.product_id,
                "quantity": i.quantity,
                "quantity_received": i.quantity_received,
                "price": _money_to_raw(i.price),
            }
            for i in order.items
        ],
        "total_amount": _money_to_raw(order.total_amount),
    }


def purchase_order_to_domain(raw: dict) -> PurchaseOrder:
    return PurchaseOrder(
        id=raw["id"],
        po_number=raw["po_number"],
        date=_date_to_domain(raw["date"]),
        supplier_id=raw["supplier_id"],
        vendor_name=raw.get("vendor_name", ""),
        vendor_contact=raw.get("vendor_contact"),
        expected_delivery_date=_date_to_domain(raw.get("expected_delivery_date")),
        notes=raw.get("notes"),
        status=PurchaseOrderStatus(raw["status"]),
        items=tuple(
            PurchaseOrderItem(
                product_id=i["product_id"],
                quantity=i["quantity"],
                quantity_received=i.get("quantity_received", 0),
                price=_money_to_domain(i["price"]),
            )
            for i in raw["items"]
        ),
    )


def purchase_entry_to_raw(entry: PurchaseEntry) -> dict:
    return {
        "id": entry.id,
        "purchase_order_id": entry.purchase_order_id,
        "entry_date": _date_to_raw(entry.entry_date),
        "supplier_id": entry.supplier_id,
        "notes": entry.notes,
        "status": entry.status.value,
        "items": [
            {"product_id": i.product_id, "quantity_received": i.quantity_received}
            for i in entry.items
        ],
    }


def purchase_entry_to_domain(raw: dict) -> PurchaseEntry:
    return PurchaseEntry(
        id=raw["id"],
        purchase_order_id=raw.get("purchase_order_id"),
        entry_date=_date_to_domain(raw["entry_date"]),
        supplier_id=raw["supplier_id"],
        notes=raw.get("notes"),
        status=PurchaseEntryStatus(raw["status"]),
        items=tuple(
            ReceivedItem(i["product_id"], i["quantity_received"]) for i in raw["items"]
        ),
    )


# --- Reference data -------------------------------------------------------------


def unit_to_raw(unit: Unit) -> dict:
    return {"id": unit.id, "name": unit.name}


def unit_to_domain(raw: dict) -> Unit:
    return Unit(id=raw["id"], name=raw["name"])


def category_to_raw(category: Category) -> dict:
    return {"id": category.id, "name": category.name}


def category_to_domain(raw: dict) -> Category:
    return Category(id=raw["id"], name=raw["name"])


def supplier_to_raw(supplier: Supplier) -> dict:
    return {
        "id": supplier.id,
        "name": supplier.name,
        "email": supplier.email,
        "phone": supplier.phone,
        "address": supplier.address,
    }


def supplier_to_domain(raw: dict) -> Supplier:
    return Supplier(
        id=raw["id"],
        name=raw["name"],
        email=raw.get("email", ""),
        phone=raw.get("phone", ""),
        address=raw.get("address", ""),
    )


def _tax_to_raw(tax: Tax) -> dict:
    return {"id": tax.id, "name": tax.name, "rate": str(tax.rate)}


def _tax_to_domain(raw: dict) -> Tax:
    return Tax(id=raw["id"], name=raw["name"], rate=Decimal(str(raw["rate"])))


def settings_to_raw(settings: AppSettings) -> dict:
    profile = settings.company_profile
    return {
        "app_name": settings.app_name,
        "currency": settings.currency,
        "company_profile": {
            "name": profile.name,
            "address": profile.address,
            "phone": profile.phone,
            "tax_number": profile.tax_number,
        },
        "default_tax_rule": settings.default_tax_rule.value,
        "global_tax_percent": (
            str(settings.global_tax_percent)
            if settings.global_tax_percent is not None
            else None
        ),
        "taxes": [_tax_to_raw(t) for t in settings.taxes],
    }


def settings_to_domain(raw: dict) -> AppSettings:
    """Missing fields take their defaults, so partial records still load."""
    defaults = AppSettings()
    profile = raw.get("company_profile") or {}
    global_tax = raw.get("global_tax_percent")
    return AppSettings(
        app_name=raw.get("app_name", defaults.app_name),
        currency=raw.get("currency", defaults.currency),
        company_profile=CompanyProfile(**profile) if profile else CompanyProfile(),
        default_tax_rule=TaxRule(
            raw.get("default_tax_rule", defaults.default_tax_rule.value)
        ),
        global_tax_percent=Decimal(str(global_tax)) if global_tax is not None else None,
        taxes=tuple(_tax_to_domain(t) for t in raw.get("taxes") or []),
    )


# --- Collections ----------------------------------------------------------------

_LIST_CODECS = {
    "products": (product_to_raw, product_to_domain),
    "purchase_orders": (purchase_order_to_raw, purchase_order_to_domain),
    "purchase_entries": (purchase_entry_to_raw, purchase_entry_to_domain),
    "invoices": (invoice_to_raw, invoice_to_domain),
    "units": (unit_to_raw, unit_to_domain),
    "categories": (category_to_raw, category_to_domain),
    "suppliers": (supplier_to_raw, supplier_to_domain),
}


def collection_to_raw(key: str, value: Any) -> Any:
    if key == "settings":
        return settings_to_raw(value)
    to_raw, _ = _LIST_CODECS[key]
    return [to_raw(item) for item in value]


def collection_to_domain(key: str, raw: Any) -> Any:
    """Decode one stored collection.

    Raises KeyError, TypeError, ValueError or a domain ValidationError when
    the record does not match; the repository turns that into the default.
    """
    if key == "settings":
        if not isinstance(raw, dict):
            raise TypeError(f"settings must be an object, got {type(raw).__name__}")
        return settings_to_domain(raw)
    if not isinstance(raw, list):
        raise TypeError(f"{key} must be a list, got {type(raw).__name__}")
    _, to_domain = _LIST_CODECS[key]
    return tuple(to_domain(item) for item in raw)
