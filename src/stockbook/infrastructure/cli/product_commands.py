"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockbook.application.add_product import AddProductHandler
from stockbook.application.delete_product import DeleteProductHandler
from stockbook.application.update_product import UpdateProductHandler
from stockbook.domain.exceptions import DomainException
from stockbook.infrastructure.bootstrap import ledger_repository, stock_ledger


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--unit", required=True, help="Unit name or ID (e.g. pcs).")
@click.option("--category", default=None, help="Category name or ID.")
@click.option("--threshold", type=int, default=None, help="Low-stock alert level.")
def product_add(
    name: str, price: str, unit: str, category: str | None, threshold: int | None
) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(ledger_repository(), stock_ledger())

    try:
        product = handler.handle(
            name=name, price=price, unit=unit, category=category, threshold=threshold
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalogue."""
    state = ledger_repository().load()

    if not state.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'Unit':<8} {'Price':>10} {'Alert':>6}")
    click.echo("-" * 58)
    for p in state.products:
        unit = state.unit(p.unit_id)
        threshold = "" if p.threshold_value is None else str(p.threshold_value)
        click.echo(
            f"{p.id:<10} {p.name:<20} {(unit.name if unit else '?'):<8} "
            f"{str(p.price):>10} {threshold:>6}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--threshold", type=int, default=None, help="New low-stock level (0 clears it).")
def product_update(product_id: str, price: str | None, threshold: int | None) -> None:
    """Update a product's price or low-stock threshold."""
    if price is None and threshold is None:
        raise click.ClickException("Nothing to update: pass --price and/or --threshold")

    handler = UpdateProductHandler(ledger_repository(), stock_ledger())

    try:
        product = handler.handle(product_id=product_id, new_price=price, threshold=threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated (price {product.price})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="This also removes the product from every invoice. Continue?")
def product_delete(product_id: str) -> None:
    """Delete a product and its invoice lines."""
    handler = DeleteProductHandler(ledger_repository(), stock_ledger())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
