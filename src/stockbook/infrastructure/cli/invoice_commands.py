"""CLI commands for the Invoice aggregate."""

from __future__ import annotations

from datetime import date, datetime

import click

from stockbook.application.add_invoice import AddInvoiceHandler
from stockbook.application.change_invoice_status import ChangeInvoiceStatusHandler
from stockbook.application.delete_invoice import DeleteInvoiceHandler
from stockbook.application.dto import InvoiceDTO, InvoiceItemSpec, InvoiceSpec
from stockbook.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from stockbook.application.update_invoice import UpdateInvoiceHandler
from stockbook.domain.exceptions import DomainException
from stockbook.domain.model.invoice import InvoiceStatus
from stockbook.infrastructure.bootstrap import ledger_repository, stock_ledger

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_STATUSES = click.Choice([s.value for s in InvoiceStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[InvoiceItemSpec]:
    """Parse 'Widget:3,Gadget:5@12.50' into InvoiceItemSpec list."""
    specs: list[InvoiceItemSpec] = []
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
            InvoiceItemSpec(product=name.strip(), quantity=qty, price=price.strip() or None)
        )
    return specs


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def _display_invoice(dto: InvoiceDTO) -> None:
    """Shared formatting for displaying an invoice."""
    click.echo(f"Invoice {dto.invoice_number}  (id={dto.id}, status={dto.status})")
    click.echo(f"Client:   {dto.client_name}")
    click.echo(f"Dated:    {dto.invoice_date}   Due: {dto.due_date}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*50}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*50}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>23}")
    if dto.tax:
        click.echo(f"  {'Tax':<27} {dto.tax:>23}")
    click.echo(f"  {'Invoice Total':<27} {dto.total:>23}")


def _invoice_options(func):
    options = [
        click.option("--number", "invoice_number", required=True, help="Invoice number."),
        click.option("--client", required=True, help="Client name."),
        click.option("--email", default=None, help="Client email."),
        click.option("--items", required=True, help="Items as 'Product:Qty[@Price],...'."),
        click.option("--date", "invoice_date", type=_DATE, default=None, help="Invoice date (YYYY-MM-DD). New invoices default to today."),
        click.option("--due", "due_date", type=_DATE, default=None, help="Due date (YYYY-MM-DD). New invoices default to the invoice date."),
        click.option("--status", type=_STATUSES, default=None, help="New invoices default to Draft."),
        click.option("--tax", "tax_id", default=None, help="Tax ID to apply to the subtotal."),
        click.option("--notes", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_spec(
    invoice_number, client, email, items, invoice_date, due_date, status, tax_id, notes
) -> InvoiceSpec:
    return InvoiceSpec(
        invoice_number=invoice_number,
        client_name=client,
        client_email=email,
        invoice_date=_as_date(invoice_date),
        due_date=_as_date(due_date),
        items=_parse_items(items),
        status=status,
        tax_id=tax_id,
        notes=notes,
    )


@click.command("create")
@_invoice_options
def invoice_create(**options) -> None:
    """Create an invoice (allocates stock)."""
    spec = _build_spec(**options)
    handler = AddInvoiceHandler(ledger_repository(), stock_ledger())

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.invoice_number} created  (id={dto.id})")
    _display_invoice(dto)


@click.command("update")
@click.option("--id", "invoice_id", required=True, help="Invoice ID to replace.")
@_invoice_options
def invoice_update(invoice_id: str, **options) -> None:
    """Replace an invoice's lines (re-allocates stock).

    Dates, status, email, tax and notes that are not given keep their
    stored values.
    """
    spec = _build_spec(**options)
    handler = UpdateInvoiceHandler(ledger_repository(), stock_ledger())

    try:
        dto = handler.handle(invoice_id, spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.invoice_number} updated.")
    _display_invoice(dto)


@click.command("status")
@click.option("--id", "invoice_id", required=True, help="Invoice ID.")
@click.argument("status", type=_STATUSES)
def invoice_status(invoice_id: str, status: str) -> None:
    """Change an invoice's status."""
    handler = ChangeInvoiceStatusHandler(ledger_repository(), stock_ledger())

    try:
        dto = handler.handle(invoice_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.invoice_number} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "invoice_id", required=True, help="Invoice ID to delete.")
def invoice_delete(invoice_id: str) -> None:
    """Delete an invoice (returns its stock)."""
    handler = DeleteInvoiceHandler(ledger_repository(), stock_ledger())

    if handler.handle(invoice_id):
        click.echo(f"Invoice {invoice_id} deleted.")
    else:
        click.echo(f"No invoice with id {invoice_id}; nothing to delete.")


@click.command("show")
@click.option("--id", "invoice_ref", required=True, help="Invoice ID or number.")
def invoice_show(invoice_ref: str) -> None:
    """Show details of an existing invoice."""
    handler = ShowInvoiceHandler(ledger_repository())

    try:
        dto = handler.handle(invoice_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)


@click.command("list")
def invoice_list() -> None:
    """List all invoices."""
    invoices = ListInvoicesHandler(ledger_repository()).handle()

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"{'ID':<10} {'Number':<12} {'Client':<20} {'Status':<10} {'Total':>12}")
    click.echo("-" * 68)
    for dto in invoices:
        click.echo(
            f"{dto.id:<10} {dto.invoice_number:<12} {dto.client_name:<20} "
            f"{dto.status:<10} {dto.total:>12}"
        )
