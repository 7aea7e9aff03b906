"""Reference-data operations: units, categories, suppliers, taxes, settings.

None of these touch stock.  Like the ledger, each function takes a
snapshot and returns a new one.
"""

from __future__ import annotations

from dataclasses import replace

from stockbook.domain.exceptions import EntityNotFoundError, ValidationError
from stockbook.domain.model.ledger_state import LedgerState
from stockbook.domain.model.reference import Category, Supplier, Tax, Unit


def _append_unique(items, entity, what: str):
    for item in items:
        if item.name.lower() == entity.name.lower():
            raise ValidationError(f"{what} '{entity.name}' already exists")
    return items + (entity,)


def _replace(items, entity, what: str):
    if not any(item.id == entity.id for item in items):
        raise EntityNotFoundError(f"{what} with ID '{entity.id}' not found")
    return tuple(entity if item.id == entity.id else item for item in items)


def _remove(items, entity_id: str):
    return tuple(item for item in items if item.id != entity_id)


# --- Units ----------------------------------------------------------------------


def add_unit(state: LedgerState, unit: Unit) -> LedgerState:
    return replace(state, units=_append_unique(state.units, unit, "Unit"))


# --- Categories -----------------------------------------------------------------


def add_category(state: LedgerState, category: Category) -> LedgerState:
    return replace(
        state, categories=_append_unique(state.categories, category, "Category")
    )


def update_category(state: LedgerState, category: Category) -> LedgerState:
    return replace(
        state, categories=_replace(state.categories, category, "Category")
    )


def delete_category(state: LedgerState, category_id: str) -> LedgerState:
    return replace(state, categories=_remove(state.categories, category_id))


# --- Suppliers ------------------------------------------------------------------


def add_supplier(state: LedgerState, supplier: Supplier) -> LedgerState:
    return replace(
        state, suppliers=_append_unique(state.suppliers, supplier, "Supplier")
    )


def update_supplier(state: LedgerState, supplier: Supplier) -> LedgerState:
    return replace(state, suppliers=_replace(state.suppliers, supplier, "Supplier"))


def delete_supplier(state: LedgerState, supplier_id: str) -> LedgerState:
    return replace(state, suppliers=_remove(state.suppliers, supplier_id))


# --- Taxes (stored inside settings) ---------------------------------------------


def add_tax(state: LedgerState, tax: Tax) -> LedgerState:
    taxes = _append_unique(state.settings.taxes, tax, "Tax")
    return replace(state, settings=replace(state.settings, taxes=taxes))


def update_tax(state: LedgerState, tax: Tax) -> LedgerState:
    taxes = _replace(state.settings.taxes, tax, "Tax")
    return replace(state, settings=replace(state.settings, taxes=taxes))


def delete_tax(state: LedgerState, tax_id: str) -> LedgerState:
    taxes = _remove(state.settings.taxes, tax_id)
    return replace(state, settings=replace(state.settings, taxes=taxes))


# --- Settings -------------------------------------------------------------------


def update_settings(state: LedgerState, **changes) -> LedgerState:
    """Merge *changes* into the stored settings.

    ``taxes`` is managed through the tax functions and cannot be set here.
    """
    if "taxes" in changes:
        raise ValidationError("Use the tax operations to change taxes")
    if "currency" in changes:
        currency = changes["currency"]
        if not currency or len(currency.strip()) != 3:
            raise ValidationError(f"Invalid currency code: {currency!r}")
        changes["currency"] = currency.strip().upper()
    try:
        settings = replace(state.settings, **changes)
    except TypeError as exc:
        raise ValidationError(f"Unknown setting: {exc}") from exc
    return replace(state, settings=settings)
