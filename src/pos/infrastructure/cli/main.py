"""Entry point for the ``pos`` command."""

from __future__ import annotations

from pathlib import Path

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.customer_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_update,
)
from pos.infrastructure.cli.expense_commands import (
    expense_add,
    expense_delete,
    expense_list,
    expense_update,
)
from pos.infrastructure.cli.invoice_commands import (
    invoice_analytics,
    invoice_cancel,
    invoice_list,
    invoice_show,
    invoice_status,
)
from pos.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_pay,
    order_show,
)
from pos.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from pos.infrastructure.cli.report_commands import (
    report_customers,
    report_dashboard,
    report_expenses,
    report_inventory,
    report_profit_loss,
    report_sales,
)
from pos.infrastructure.config import load_settings
from pos.infrastructure.log import configure_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to pos.ini (defaults to $POS_CONFIG or the nearest pos.ini).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """POS - point of sale for a pottery shop"""
    try:
        settings = load_settings(config_path)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level, settings.log_file)
    ctx.obj = Container(settings)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def order() -> None:
    """Check out and manage orders."""


@cli.group()
def invoice() -> None:
    """Browse and manage invoices."""


@cli.group()
def expense() -> None:
    """Record shop expenses."""


@cli.group()
def report() -> None:
    """Sales, inventory and profit reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
invoice.add_command(invoice_analytics)
invoice.add_command(invoice_cancel)
invoice.add_command(invoice_list)
invoice.add_command(invoice_show)
invoice.add_command(invoice_status)
expense.add_command(expense_add)
expense.add_command(expense_delete)
expense.add_command(expense_list)
expense.add_command(expense_update)
report.add_command(report_customers)
report.add_command(report_dashboard)
report.add_command(report_expenses)
report.add_command(report_inventory)
report.add_command(report_profit_loss)
report.add_command(report_sales)
