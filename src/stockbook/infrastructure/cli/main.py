import click

from stockbook.config import configure_logging
from stockbook.infrastructure.cli.catalog_commands import (
    category_add,
    category_delete,
    category_list,
    category_rename,
    settings_set,
    settings_show,
    supplier_add,
    supplier_delete,
    supplier_list,
    supplier_update,
    tax_add,
    tax_delete,
    tax_list,
    tax_update,
    unit_add,
    unit_list,
)
from stockbook.infrastructure.cli.invoice_commands import (
    invoice_create,
    invoice_delete,
    invoice_list,
    invoice_show,
    invoice_status,
    invoice_update,
)
from stockbook.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from stockbook.infrastructure.cli.purchase_commands import (
    purchase_delete,
    purchase_order,
    purchase_orders,
    purchase_receive,
    purchase_show,
    purchase_update,
)
from stockbook.infrastructure.cli.stock_commands import (
    stock_available,
    stock_check,
    stock_low,
    stock_movements,
    stock_show,
)


@click.group()
def cli() -> None:
    """Stockbook: invoicing with stock tracking."""
    configure_logging()


@cli.group()
def invoice() -> None:
    """Manage invoices."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def purchase() -> None:
    """Manage purchase orders and goods received."""


@cli.group()
def stock() -> None:
    """Inspect stock levels."""


@cli.group()
def unit() -> None:
    """Manage units of measure."""


@cli.group()
def category() -> None:
    """Manage product categories."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


@cli.group()
def tax() -> None:
    """Manage tax rates."""


@cli.group()
def settings() -> None:
    """Show or change business settings."""


# Register subcommands
invoice.add_command(invoice_create)
invoice.add_command(invoice_delete)
invoice.add_command(invoice_list)
invoice.add_command(invoice_show)
invoice.add_command(invoice_status)
invoice.add_command(invoice_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
purchase.add_command(purchase_delete)
purchase.add_command(purchase_order)
purchase.add_command(purchase_orders)
purchase.add_command(purchase_receive)
purchase.add_command(purchase_show)
purchase.add_command(purchase_update)
stock.add_command(stock_available)
stock.add_command(stock_check)
stock.add_command(stock_low)
stock.add_command(stock_movements)
stock.add_command(stock_show)
unit.add_command(unit_add)
unit.add_command(unit_list)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_rename)
supplier.add_command(supplier_add)
supplier.add_command(supplier_delete)
supplier.add_command(supplier_list)
supplier.add_command(supplier_update)
tax.add_command(tax_add)
tax.add_command(tax_delete)
tax.add_command(tax_list)
tax.add_command(tax_update)
settings.add_command(settings_set)
settings.add_command(settings_show)
