"""CLI commands for stock levels and item tracking."""

from __future__ import annotations

import click

from stockbook.application.check_stock import CheckStockHandler
from stockbook.application.dto import StockLineDTO
from stockbook.application.show_item_tracking import ShowItemTrackingHandler
from stockbook.application.show_stock import AvailableStockHandler, ShowStockHandler
from stockbook.domain.exceptions import DomainException
from stockbook.infrastructure.bootstrap import ledger_repository, stock_ledger


def _display_levels(lines: list[StockLineDTO]) -> None:
    click.echo(
        f"{'Product':<20} {'Received':>9} {'Sold':>8} {'Available':>10} {'Alert':>6}"
    )
    click.echo("-" * 57)
    for line in lines:
        threshold = "" if line.threshold is None else str(line.threshold)
        flag = "  LOW" if line.low else ""
        click.echo(
            f"{line.product_name:<20} {line.received:>9} {line.allocated:>8} "
            f"{line.available:>10} {threshold:>6}{flag}"
        )


@click.command("show")
def stock_show() -> None:
    """Show current stock levels."""
    lines = ShowStockHandler(ledger_repository(), stock_ledger()).handle()

    if not lines:
        click.echo("No products found.")
        return
    _display_levels(lines)


@click.command("low")
def stock_low() -> None:
    """List products at or below their low-stock threshold."""
    lines = ShowStockHandler(ledger_repository(), stock_ledger()).handle(low_only=True)

    if not lines:
        click.echo("No products are running low.")
        return
    click.echo("Running low, please reorder:")
    _display_levels(lines)


@click.command("available")
@click.option("--product", required=True, help="Product name or ID.")
@click.option("--exclude-invoice", default=None, help="Ignore this invoice's own allocation.")
def stock_available(product: str, exclude_invoice: str | None) -> None:
    """Print the available quantity of one product."""
    handler = AvailableStockHandler(ledger_repository(), stock_ledger())

    try:
        available = handler.handle(product, exclude_invoice_id=exclude_invoice)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(str(available))


@click.command("movements")
@click.option("--direction", type=click.Choice(["IN", "OUT"], case_sensitive=False), default=None)
@click.option("--search", default=None, help="Filter by product name or details.")
@click.option("--since", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def stock_movements(direction, search, since) -> None:
    """Item tracking: goods in and out, newest first."""
    handler = ShowItemTrackingHandler(ledger_repository(), stock_ledger())
    rows = handler.handle(
        direction=direction, search=search, since=since.date() if since else None
    )

    if not rows:
        click.echo("No stock movements found.")
        return

    click.echo(f"{'Date':<11} {'Dir':<4} {'Product':<20} {'Qty':>6} {'Unit':<6} Details")
    click.echo("-" * 75)
    for row in rows:
        click.echo(
            f"{row.date:<11} {row.direction:<4} {row.product_name:<20} "
            f"{row.quantity:>6} {row.unit_name:<6} {row.details}"
        )


@click.command("check")
def stock_check() -> None:
    """Verify that product allocations agree with the invoices."""
    problems = CheckStockHandler(ledger_repository(), stock_ledger()).handle()

    if not problems:
        click.echo("Stock allocations are consistent.")
        return

    for problem in problems:
        click.echo(f"- {problem}")
    raise click.ClickException(f"{len(problems)} inconsistent allocation(s) found")
