"""CLI commands for purchase orders and goods received."""

from __future__ import annotations

from datetime import date

import click

from stockbook.application.add_purchase_order import AddPurchaseOrderHandler
from stockbook.application.delete_purchase_order import DeletePurchaseOrderHandler
from stockbook.application.dto import PurchaseItemSpec
from stockbook.application.receive_purchase import ReceivePurchaseHandler
from stockbook.application.show_purchase_order import (
    ListPurchaseOrdersHandler,
    ShowPurchaseOrderHandler,
)
from stockbook.application.update_purchase_order import UpdatePurchaseOrderHandler
from stockbook.domain.exceptions import DomainException
from stockbook.domain.model.purchase import PurchaseOrderStatus
from stockbook.infrastructure.bootstrap import ledger_repository, stock_ledger

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_ORDER_STATUSES = click.Choice([s.value for s in PurchaseOrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[PurchaseItemSpec]:
    """Parse 'Widget:20@9.50,Gadget:10' into PurchaseItemSpec list."""
    specs: list[PurchaseItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Product:Quantity[@Price]'."
            )
        name, rest = pair.rsplit(":", 1)
        qty_str, _, price = rest.partition("@")
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(
            PurchaseItemSpec(product=name.strip(), quantity=qty, price=price.strip() or None)
        )
    return specs


@click.command("order")
@click.option("--number", "po_number", required=True, help="PO number.")
@click.option("--supplier", required=True, help="Supplier name or ID.")
@click.option("--items", required=True, help="Items as 'Product:Qty[@Price],...'.")
@click.option("--date", "order_date", type=_DATE, default=None, help="Order date, default today.")
@click.option("--expected", type=_DATE, default=None, help="Expected delivery date.")
@click.option("--notes", default=None)
def purchase_order(po_number, supplier, items, order_date, expected, notes) -> None:
    """Place a purchase order with a supplier."""
    handler = AddPurchaseOrderHandler(ledger_repository(), stock_ledger())

    try:
        order = handler.handle(
            po_number=po_number,
            supplier=supplier,
            order_date=order_date.date() if order_date else date.today(),
            items=_parse_items(items),
            expected_delivery_date=expected.date() if expected else None,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Purchase order {order.po_number} created  (id={order.id}, total={order.total_amount})"
    )


@click.command("receive")
@click.option("--po", "purchase_order", default=None, help="Purchase order ID or number.")
@click.option("--supplier", default=None, help="Supplier name or ID (without --po).")
@click.option("--items", "items_str", default=None, help="Items as 'Product:Qty,...'; default: everything outstanding on --po.")
@click.option("--date", "entry_date", type=_DATE, default=None, help="Date received, default today.")
@click.option("--draft", is_flag=True, default=False, help="Record as draft (not counted as stock).")
@click.option("--notes", default=None)
def purchase_receive(purchase_order, supplier, items_str, entry_date, draft, notes) -> None:
    """Record goods received (adds stock)."""
    handler = ReceivePurchaseHandler(ledger_repository(), stock_ledger())

    try:
        entry = handler.handle(
            entry_date=entry_date.date() if entry_date else date.today(),
            items=_parse_items(items_str) if items_str else None,
            supplier=supplier,
            purchase_order=purchase_order,
            draft=draft,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    total = sum(i.quantity_received for i in entry.items)
    click.echo(
        f"Purchase entry {entry.id} recorded  ({total} units, status={entry.status.value})"
    )


@click.command("update")
@click.option("--id", "order_ref", required=True, help="Purchase order ID or number.")
@click.option("--expected", type=_DATE, default=None, help="Expected delivery date.")
@click.option("--notes", default=None)
@click.option("--status", type=_ORDER_STATUSES, default=None)
def purchase_update(order_ref, expected, notes, status) -> None:
    """Change a purchase order's delivery date, notes or status."""
    handler = UpdatePurchaseOrderHandler(ledger_repository(), stock_ledger())

    try:
        order = handler.handle(
            order_ref,
            expected_delivery_date=expected.date() if expected else None,
            notes=notes,
            status=status,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase order {order.po_number} updated  (status={order.status.value})")


@click.command("delete")
@click.option("--id", "order_ref", required=True, help="Purchase order ID or number.")
def purchase_delete(order_ref: str) -> None:
    """Delete a purchase order (goods already received stay in stock)."""
    handler = DeletePurchaseOrderHandler(ledger_repository(), stock_ledger())

    if handler.handle(order_ref):
        click.echo(f"Purchase order {order_ref} deleted.")
    else:
        click.echo(f"No purchase order {order_ref}; nothing to delete.")


@click.command("show")
@click.option("--id", "order_ref", required=True, help="Purchase order ID or number.")
def purchase_show(order_ref: str) -> None:
    """Show a purchase order and what has been received."""
    handler = ShowPurchaseOrderHandler(ledger_repository())

    try:
        dto = handler.handle(order_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase order {dto.po_number}  (id={dto.id}, status={dto.status})")
    click.echo(f"Supplier: {dto.supplier_name}")
    click.echo(f"Date:     {dto.date}")
    if dto.expected_delivery_date:
        click.echo(f"Expected: {dto.expected_delivery_date}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Ordered':>8} {'Received':>9} {'Price':>10}")
    click.echo(f"  {'-'*50}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>8} {item.received:>9} {item.unit_price:>10}"
        )
    click.echo(f"  {'-'*50}")
    click.echo(f"  {'Order Total':<27} {dto.total:>23}")


@click.command("list")
def purchase_orders() -> None:
    """List purchase orders."""
    orders = ListPurchaseOrdersHandler(ledger_repository()).handle()

    if not orders:
        click.echo("No purchase orders found.")
        return

    click.echo(f"{'ID':<10} {'Number':<12} {'Supplier':<20} {'Status':<20} {'Total':>12}")
    click.echo("-" * 78)
    for dto in orders:
        click.echo(
            f"{dto.id:<10} {dto.po_number:<12} {dto.supplier_name:<20} "
            f"{dto.status:<20} {dto.total:>12}"
        )
