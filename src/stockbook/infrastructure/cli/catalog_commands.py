"""CLI commands for reference data: units, categories, suppliers, taxes, settings."""

from __future__ import annotations

import click

from stockbook.application.manage_catalog import (
    AddCategoryHandler,
    AddSupplierHandler,
    AddTaxHandler,
    AddUnitHandler,
    DeleteCategoryHandler,
    DeleteSupplierHandler,
    DeleteTaxHandler,
    RenameCategoryHandler,
    UpdateSupplierHandler,
    UpdateTaxHandler,
)
from stockbook.application.update_settings import UpdateSettingsHandler
from stockbook.domain.exceptions import DomainException
from stockbook.infrastructure.bootstrap import ledger_repository, stock_ledger


def _run(handler_cls, *args, **kwargs):
    handler = handler_cls(ledger_repository(), stock_ledger())
    try:
        return handler.handle(*args, **kwargs)
    except DomainException as exc:
        raise click.ClickException(str(exc))


# --- Units ----------------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Unit name (e.g. pcs, kg).")
def unit_add(name: str) -> None:
    """Add a unit of measure."""
    unit = _run(AddUnitHandler, name)
    click.echo(f"Unit {unit.id} '{unit.name}' added")


@click.command("list")
def unit_list() -> None:
    """List units of measure."""
    units = ledger_repository().load().units
    if not units:
        click.echo("No units found.")
        return
    for u in units:
        click.echo(f"{u.id:<10} {u.name}")


# --- Categories -----------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Category name.")
def category_add(name: str) -> None:
    """Add a product category."""
    category = _run(AddCategoryHandler, name)
    click.echo(f"Category {category.id} '{category.name}' added")


@click.command("rename")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", required=True, help="New name.")
def category_rename(category_id: str, name: str) -> None:
    """Rename a category."""
    _run(RenameCategoryHandler, category_id, name)
    click.echo(f"Category {category_id} renamed to '{name}'")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_delete(category_id: str) -> None:
    """Delete a category."""
    _run(DeleteCategoryHandler, category_id)
    click.echo(f"Category {category_id} deleted.")


@click.command("list")
def category_list() -> None:
    """List product categories."""
    categories = ledger_repository().load().categories
    if not categories:
        click.echo("No categories found.")
        return
    for c in categories:
        click.echo(f"{c.id:<10} {c.name}")


# --- Suppliers ------------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Supplier name.")
@click.option("--email", default="")
@click.option("--phone", default="")
@click.option("--address", default="")
def supplier_add(name: str, email: str, phone: str, address: str) -> None:
    """Add a supplier."""
    supplier = _run(AddSupplierHandler, name, email=email, phone=phone, address=address)
    click.echo(f"Supplier {supplier.id} '{supplier.name}' added")


@click.command("update")
@click.option("--id", "supplier_id", required=True, help="Supplier ID.")
@click.option("--name", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--address", default=None)
def supplier_update(supplier_id: str, **contact: str | None) -> None:
    """Update supplier details."""
    supplier = _run(UpdateSupplierHandler, supplier_id, **contact)
    click.echo(f"Supplier {supplier.id} '{supplier.name}' updated")


@click.command("delete")
@click.option("--id", "supplier_id", required=True, help="Supplier ID.")
def supplier_delete(supplier_id: str) -> None:
    """Delete a supplier."""
    _run(DeleteSupplierHandler, supplier_id)
    click.echo(f"Supplier {supplier_id} deleted.")


@click.command("list")
def supplier_list() -> None:
    """List suppliers."""
    suppliers = ledger_repository().load().suppliers
    if not suppliers:
        click.echo("No suppliers found.")
        return
    click.echo(f"{'ID':<10} {'Name':<20} {'Email':<25} {'Phone':<15}")
    click.echo("-" * 73)
    for s in suppliers:
        click.echo(f"{s.id:<10} {s.name:<20} {s.email:<25} {s.phone:<15}")


# --- Taxes ----------------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Tax name (e.g. VAT).")
@click.option("--rate", required=True, help="Rate in percent (e.g. 18).")
def tax_add(name: str, rate: str) -> None:
    """Add a tax rate."""
    tax = _run(AddTaxHandler, name, rate)
    click.echo(f"Tax {tax.id} '{tax.name}' added at {tax.rate}%")


@click.command("update")
@click.option("--id", "tax_id", required=True, help="Tax ID.")
@click.option("--name", required=True)
@click.option("--rate", required=True)
def tax_update(tax_id: str, name: str, rate: str) -> None:
    """Change a tax rate (existing invoices keep their tax amount)."""
    tax = _run(UpdateTaxHandler, tax_id, name, rate)
    click.echo(f"Tax {tax.id} '{tax.name}' now {tax.rate}%")


@click.command("delete")
@click.option("--id", "tax_id", required=True, help="Tax ID.")
def tax_delete(tax_id: str) -> None:
    """Delete a tax rate."""
    _run(DeleteTaxHandler, tax_id)
    click.echo(f"Tax {tax_id} deleted.")


@click.command("list")
def tax_list() -> None:
    """List tax rates."""
    taxes = ledger_repository().load().settings.taxes
    if not taxes:
        click.echo("No taxes configured.")
        return
    for t in taxes:
        click.echo(f"{t.id:<10} {t.name:<20} {t.rate:>6}%")


# --- Settings -------------------------------------------------------------------


@click.command("show")
def settings_show() -> None:
    """Show business settings."""
    settings = ledger_repository().load().settings
    profile = settings.company_profile
    click.echo(f"App name:  {settings.app_name}")
    click.echo(f"Currency:  {settings.currency}")
    click.echo(f"Tax rule:  {settings.default_tax_rule.value}")
    click.echo(f"Company:   {profile.name}")
    click.echo(f"Address:   {profile.address}")
    click.echo(f"Phone:     {profile.phone}")
    if profile.tax_number:
        click.echo(f"Tax no.:   {profile.tax_number}")


@click.command("set")
@click.option("--currency", default=None, help="ISO currency code for new invoices.")
@click.option("--app-name", default=None)
def settings_set(currency: str | None, app_name: str | None) -> None:
    """Change business settings."""
    changes = {}
    if currency is not None:
        changes["currency"] = currency
    if app_name is not None:
        changes["app_name"] = app_name
    if not changes:
        raise click.ClickException("Nothing to change")

    handler = UpdateSettingsHandler(ledger_repository())
    try:
        settings = handler.handle(**changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Settings updated (currency={settings.currency})")
