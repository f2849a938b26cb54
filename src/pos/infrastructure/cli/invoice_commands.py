"""CLI commands for invoices."""

from __future__ import annotations

from datetime import datetime

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import (
    build_window,
    format_amount,
    pass_container,
    window_options,
)


@click.command("list")
@click.option("--status", default=None, help="active, cancelled or refunded.")
@click.option("--customer", "customer_id", default=None, help="Customer ID.")
@click.option("--search", default=None, help="Match order number, customer or product.")
@click.option("--limit", type=int, default=50, show_default=True)
@window_options
@pass_container
def invoice_list(
    container: Container,
    status: str | None,
    customer_id: str | None,
    search: str | None,
    limit: int,
    start: datetime | None,
    end: datetime | None,
) -> None:
    """List invoices, newest first."""
    window = build_window(start, end, default_days=None)
    try:
        invoices = container.list_invoices().handle(
            status=status,
            customer_id=customer_id,
            start=window.start_at if window else None,
            end=window.end_at if window else None,
            search=search,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"{'Number':<20} {'Date':<22} {'Customer':<22} {'Status':<10} {'Total':>14}")
    click.echo("-" * 92)
    for inv in invoices:
        click.echo(
            f"{inv.order_number:<20} {inv.invoice_date:<22} {inv.customer_name:<22} "
            f"{inv.status:<10} {inv.total:>14}"
        )


@click.command("show")
@click.option("--id", "invoice_ref", required=True, help="Invoice ID or order number.")
@pass_container
def invoice_show(container: Container, invoice_ref: str) -> None:
    """Show an invoice with its line items."""
    try:
        dto = container.show_invoice().handle(invoice_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_name} {dto.customer_phone}".rstrip())
    click.echo(f"Date:     {dto.invoice_date}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'List':>12} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*69}")
    for line in dto.items:
        click.echo(
            f"  {line.product_name:<24} {line.quantity:>5} {line.original_price:>12} "
            f"{line.final_price:>12} {line.total:>12}"
        )
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>39}")
    click.echo(f"  {'Discount (' + dto.discount_percentage + ')':<30} {dto.discount:>39}")
    click.echo(f"  {'Total':<30} {dto.total:>39}")


@click.command("status")
@click.option("--id", "invoice_id", required=True, help="Invoice ID or order number.")
@click.argument("status")
@pass_container
def invoice_status(container: Container, invoice_id: str, status: str) -> None:
    """Set an invoice's status (active, cancelled, refunded)."""
    try:
        dto = container.update_invoice_status().handle(invoice_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.order_number} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "invoice_id", required=True, help="Invoice ID or order number.")
@click.option("--reason", default="", help="Why the invoice is cancelled.")
@pass_container
def invoice_cancel(container: Container, invoice_id: str, reason: str) -> None:
    """Cancel an invoice without touching its order."""
    try:
        dto = container.cancel_invoice().handle(invoice_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice {dto.order_number} cancelled.")


@click.command("analytics")
@window_options
@pass_container
def invoice_analytics(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Revenue summary of active invoices (last 30 days by default)."""
    window = build_window(start, end)
    try:
        stats = container.invoice_analytics().handle(window)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    click.echo(f"Invoices:            {stats.total_invoices}")
    click.echo(f"Revenue:             {format_amount(symbol, stats.total_revenue)}")
    click.echo(f"Discount given:      {format_amount(symbol, stats.total_discount)}")
    click.echo(f"Average order value: {format_amount(symbol, stats.average_order_value)}")
    for method, amount in sorted(stats.revenue_by_payment_method.items()):
        click.echo(f"  {method:<18} {format_amount(symbol, amount):>14}")
