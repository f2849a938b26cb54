"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from pos.application.create_order import build_cart
from pos.application.dto import AdHocLineSpec, CartLineSpec, OrderDTO
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import build_window, pass_container, window_options


def _parse_item(raw: str) -> CartLineSpec:
    """Parse 'PRODUCT_ID:QTY' or 'PRODUCT_ID:QTY@PRICE'."""
    head, _, price = raw.partition("@")
    if ":" not in head:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'ProductId:Quantity[@Price]'."
        )
    product_id, qty_str = head.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for product '{product_id}'.")
    return CartLineSpec(product_id=product_id.strip(), quantity=qty, price=price.strip() or None)


def _parse_adhoc(raw: str) -> AdHocLineSpec:
    """Parse 'NAME:QTY@PRICE'."""
    head, sep, price = raw.partition("@")
    if ":" not in head or not sep or not price.strip():
        raise click.BadParameter(f"Invalid ad-hoc item '{raw}'. Expected 'Name:Quantity@Price'.")
    name, qty_str = head.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for item '{name}'.")
    return AdHocLineSpec(name=name.strip(), quantity=qty, price=price.strip())


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_id or 'Walk-in'}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.cancelled_at:
        click.echo(f"Cancelled: {dto.cancelled_at}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'List':>12} {'Price':>12} {'Disc':>8} {'Total':>12}")
    click.echo(f"  {'-'*78}")
    for item in dto.items:
        name = f"{item.product_name}*" if item.ad_hoc else item.product_name
        click.echo(
            f"  {name:<24} {item.quantity:>5} {item.original_price:>12} "
            f"{item.unit_price:>12} {item.discount_percentage:>8} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*78}")
    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>48}")
    click.echo(f"  {'Discount (' + dto.discount_percentage + ')':<30} {dto.discount:>48}")
    click.echo(f"  {'Order Total':<30} {dto.total:>48}")
    if dto.payment_status != "paid":
        click.echo(f"  {'Paid':<30} {dto.amount_paid:>48}")
        click.echo(f"  {'Balance due':<30} {dto.remaining_amount:>48}")


def _warn_failures(failed: tuple[str, ...]) -> None:
    for effect in failed:
        click.echo(f"Warning: follow-up step '{effect}' was not applied.", err=True)


@click.command("create")
@click.option("--customer", "customer_id", default=None, help="Customer ID (omit for walk-in).")
@click.option("--payment", "payment_method", default="Cash", show_default=True, help="Payment method.")
@click.option("--item", "items", multiple=True, help="Catalog item as 'ProductId:Qty[@Price]'.")
@click.option("--adhoc", "adhoc_items", multiple=True, help="One-off item as 'Name:Qty@Price'.")
@click.option("--advance", "advance_amount", default=None, help="Advance taken now; the rest is billed later.")
@pass_container
def order_create(
    container: Container,
    customer_id: str | None,
    payment_method: str,
    items: tuple[str, ...],
    adhoc_items: tuple[str, ...],
    advance_amount: str | None,
) -> None:
    """Check out a cart and record the order."""
    lines = [_parse_item(raw) for raw in items]
    ad_hoc = [_parse_adhoc(raw) for raw in adhoc_items]

    try:
        cart = build_cart(container.product_repo, lines, ad_hoc)
        result = container.finalize_order().handle(
            cart,
            payment_method=payment_method,
            customer_id=customer_id,
            advance_amount=advance_amount,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(result.order)
    _warn_failures(result.failed_side_effects)


@click.command("show")
@click.option("--id", "order_ref", required=True, help="Order ID or order number.")
@pass_container
def order_show(container: Container, order_ref: str) -> None:
    """Show details of an existing order."""
    try:
        dto = container.show_order().handle(order_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="pending, completed or cancelled.")
@click.option("--customer", "customer_id", default=None, help="Customer ID.")
@click.option("--search", default=None, help="Match order number or customer.")
@click.option("--limit", type=int, default=100, show_default=True)
@window_options
@pass_container
def order_list(
    container: Container,
    status: str | None,
    customer_id: str | None,
    search: str | None,
    limit: int,
    start: datetime | None,
    end: datetime | None,
) -> None:
    """List orders, newest first."""
    window = build_window(start, end, default_days=None)
    try:
        orders = container.list_orders().handle(
            status=status,
            customer_id=customer_id,
            start=window.start_at if window else None,
            end=window.end_at if window else None,
            search=search,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<20} {'Date':<22} {'Status':<10} {'Items':>5} {'Total':>14}")
    click.echo("-" * 75)
    for o in orders:
        click.echo(
            f"{o.order_number:<20} {o.created_at:<22} {o.status:<10} {len(o.items):>5} {o.total:>14}"
        )


@click.command("cancel")
@click.option("--id", "order_ref", required=True, help="Order ID or order number.")
@click.option("--reason", default="", help="Why the order is cancelled.")
@click.option("--refund-advance", is_flag=True, default=False, help="Mark the advance taken as refunded.")
@pass_container
def order_cancel(container: Container, order_ref: str, reason: str, refund_advance: bool) -> None:
    """Cancel an order (restores stock and cancels its invoice)."""
    try:
        result = container.cancel_order().handle(
            order_ref, reason=reason, refund_advance=refund_advance
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.already_cancelled:
        click.echo(f"Order {result.order.order_number} was already cancelled.")
        return
    click.echo(f"Order {result.order.order_number} cancelled.")
    _warn_failures(result.failed_side_effects)
    if result.order.refund_advance:
        click.echo(f"Advance of {result.order.amount_paid} to be refunded.")


@click.command("pay")
@click.option("--id", "order_ref", required=True, help="Order ID or order number.")
@click.option("--amount", required=True, help="Amount received (e.g. 500.00).")
@click.option("--payment", "payment_method", default="Cash", show_default=True, help="Payment method.")
@pass_container
def order_pay(container: Container, order_ref: str, amount: str, payment_method: str) -> None:
    """Record a payment against an order's outstanding balance."""
    try:
        result = container.record_payment().handle(
            order_ref, amount, payment_method=payment_method
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.fully_paid:
        click.echo(f"Order {result.order.order_number} is now fully paid.")
    else:
        click.echo(
            f"Order {result.order.order_number}: {result.order.remaining_amount} still due."
        )
    _warn_failures(result.failed_side_effects)
