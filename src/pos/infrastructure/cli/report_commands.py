"""CLI commands for reports and the dashboard.

Windowed reports default to the last 30 days.
"""

from __future__ import annotations

from datetime import datetime

import click

from pos.domain.exceptions import DomainException
from pos.domain.service.reporting import ReportWindow
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import (
    DEFAULT_WINDOW_DAYS,
    build_window,
    format_amount,
    pass_container,
    window_options,
)


def _window(start: datetime | None, end: datetime | None) -> ReportWindow:
    window = build_window(start, end) or ReportWindow.last_days(DEFAULT_WINDOW_DAYS)
    click.echo(f"Period: {window.start} to {window.end}")
    return window


@click.command("sales")
@window_options
@pass_container
def report_sales(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Daily sales totals."""
    window = _window(start, end)
    try:
        rows = container.reports().sales(window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    if not rows:
        click.echo("No sales in this period.")
        return
    click.echo(f"{'Date':<12} {'Orders':>7} {'Sales':>16}")
    click.echo("-" * 37)
    for row in rows:
        click.echo(f"{row.date.isoformat():<12} {row.order_count:>7} {format_amount(symbol, row.total_sales):>16}")


@click.command("inventory")
@pass_container
def report_inventory(container: Container) -> None:
    """Stock and stock value per category."""
    try:
        rows = container.reports().inventory()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    if not rows:
        click.echo("No products found.")
        return
    click.echo(f"{'Category':<16} {'Items':>6} {'Stock':>7} {'Low':>5} {'Value':>16}")
    click.echo("-" * 54)
    for row in rows:
        click.echo(
            f"{row.category:<16} {row.item_count:>6} {row.total_stock:>7} "
            f"{row.low_stock_items:>5} {format_amount(symbol, row.total_value):>16}"
        )


@click.command("customers")
@window_options
@pass_container
def report_customers(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Top customers by spend."""
    window = _window(start, end)
    try:
        rows = container.reports().customers(window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    if not rows:
        click.echo("No customer purchases in this period.")
        return
    click.echo(f"{'Name':<24} {'Phone':<14} {'Spent':>16}")
    click.echo("-" * 56)
    for row in rows:
        click.echo(f"{row.name:<24} {row.phone:<14} {format_amount(symbol, row.total_spent):>16}")


@click.command("expenses")
@window_options
@pass_container
def report_expenses(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Expenses per category."""
    window = _window(start, end)
    try:
        rows = container.reports().expenses(window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    if not rows:
        click.echo("No expenses in this period.")
        return
    click.echo(f"{'Category':<16} {'Count':>6} {'Total':>16} {'Average':>16}")
    click.echo("-" * 57)
    for row in rows:
        click.echo(
            f"{row.category:<16} {row.count:>6} {format_amount(symbol, row.total_expenses):>16} "
            f"{format_amount(symbol, row.average_expense):>16}"
        )


@click.command("profit-loss")
@window_options
@pass_container
def report_profit_loss(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Profit and loss statement."""
    window = _window(start, end)
    try:
        pnl = container.reports().profit_and_loss(window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    click.echo(f"{'Sales':<22} {format_amount(symbol, pnl.total_sales):>16}  ({pnl.total_orders} orders)")
    click.echo(f"{'Cost of goods sold':<22} {format_amount(symbol, pnl.cost_of_goods_sold):>16}")
    click.echo(f"{'Gross profit':<22} {format_amount(symbol, pnl.gross_profit):>16}")
    click.echo(f"{'Expenses':<22} {format_amount(symbol, pnl.total_expenses):>16}")
    click.echo(f"{'Net profit':<22} {format_amount(symbol, pnl.net_profit):>16}")
    click.echo(f"{'Margin':<22} {pnl.profit_margin:>15}%")


@click.command("dashboard")
@pass_container
def report_dashboard(container: Container) -> None:
    """At-a-glance shop summary."""
    try:
        summary = container.reports().dashboard()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    symbol = container.settings.currency_symbol
    click.echo(f"Total sales:       {format_amount(symbol, summary.total_sales)} ({summary.total_orders} orders)")
    click.echo(f"Customers:         {summary.total_customers}")
    click.echo(f"Products:          {summary.total_products} ({summary.low_stock_products} low on stock)")
    click.echo(f"Expenses (month):  {format_amount(symbol, summary.monthly_expenses)}")
    click.echo()
    click.echo("Last 7 days:")
    for day in summary.last_7_days:
        click.echo(f"  {day.date.isoformat():<12} {format_amount(symbol, day.total_sales):>14}")
    if summary.top_products:
        click.echo()
        click.echo("Top products:")
        for p in summary.top_products:
            click.echo(f"  {p.name:<24} {p.quantity:>5} {format_amount(symbol, p.revenue):>14}")
