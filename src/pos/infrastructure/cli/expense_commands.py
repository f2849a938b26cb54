"""CLI commands for shop expenses."""

from __future__ import annotations

from datetime import datetime

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import DATE_INPUT, build_window, pass_container, window_options


@click.command("add")
@click.option("--title", required=True, help="What the money was spent on.")
@click.option("--amount", required=True, help="Amount (e.g. 1200.00).")
@click.option("--category", required=True, help="Expense category (e.g. Clay, Rent).")
@click.option("--date", "spent_on", type=DATE_INPUT, default=None, help="Day spent (defaults to today).")
@click.option("--payment", "payment_method", default="Cash", show_default=True)
@click.option("--description", default="")
@click.option("--receipt", "receipt_number", default=None, help="Receipt number (generated when omitted).")
@pass_container
def expense_add(
    container: Container,
    title: str,
    amount: str,
    category: str,
    spent_on: datetime | None,
    payment_method: str,
    description: str,
    receipt_number: str | None,
) -> None:
    """Record an expense."""
    try:
        dto = container.add_expense().handle(
            title=title,
            amount=amount,
            category=category,
            date=spent_on.astimezone() if spent_on else None,
            payment_method=payment_method,
            description=description,
            receipt_number=receipt_number,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expense {dto.id} '{dto.title}' recorded: {dto.amount} (receipt {dto.receipt_number})")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@window_options
@pass_container
def expense_list(
    container: Container,
    category: str | None,
    start: datetime | None,
    end: datetime | None,
) -> None:
    """List expenses, most recent first."""
    window = build_window(start, end, default_days=None)
    try:
        expenses = container.list_expenses().handle(category=category, window=window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(
        f"{'ID':<34} {'Date':<11} {'Receipt':<18} {'Title':<24} {'Category':<12} {'Amount':>12}"
    )
    click.echo("-" * 116)
    for e in expenses:
        click.echo(
            f"{e.id:<34} {e.date:<11} {e.receipt_number:<18} {e.title:<24} {e.category:<12} {e.amount:>12}"
        )


@click.command("update")
@click.option("--id", "expense_id", required=True, help="Expense ID.")
@click.option("--title", default=None)
@click.option("--amount", default=None)
@click.option("--category", default=None)
@click.option("--date", "spent_on", type=DATE_INPUT, default=None, help="Day spent (YYYY-MM-DD).")
@click.option("--payment", "payment_method", default=None)
@click.option("--description", default=None)
@pass_container
def expense_update(
    container: Container,
    expense_id: str,
    title: str | None,
    amount: str | None,
    category: str | None,
    spent_on: datetime | None,
    payment_method: str | None,
    description: str | None,
) -> None:
    """Correct a recorded expense."""
    if all(v is None for v in (title, amount, category, spent_on, payment_method, description)):
        raise click.UsageError("Nothing to update.")

    try:
        dto = container.update_expense().handle(
            expense_id,
            title=title,
            amount=amount,
            category=category,
            date=spent_on.astimezone() if spent_on else None,
            payment_method=payment_method,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expense {dto.receipt_number} updated: '{dto.title}' {dto.amount} on {dto.date}")

@click.command("delete")
@click.option("--id", "expense_id", required=True, help="Expense ID.")
@pass_container
def expense_delete(container: Container, expense_id: str) -> None:
    """Remove an expense."""
    try:
        container.delete_expense().handle(expense_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Expense {expense_id} deleted.")
