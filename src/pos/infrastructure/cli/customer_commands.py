"""CLI commands for customers."""

from __future__ import annotations

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import pass_container


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Phone number.")
@click.option("--email", default="", help="Email address.")
@click.option("--address", default="", help="Postal address.")
@pass_container
def customer_add(container: Container, name: str, phone: str, email: str, address: str) -> None:
    """Add a customer."""
    try:
        dto = container.add_customer().handle(name=name, phone=phone, email=email, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} '{dto.name}' added.")


@click.command("list")
@click.option("--search", default=None, help="Match name, phone or email.")
@pass_container
def customer_list(container: Container, search: str | None) -> None:
    """List customers with their purchase totals."""
    try:
        customers = container.list_customers().handle(search=search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<34} {'Name':<22} {'Phone':<14} {'Orders':>6} {'Spent':>14}")
    click.echo("-" * 94)
    for c in customers:
        click.echo(
            f"{c.id:<34} {c.name:<22} {c.phone:<14} {c.total_purchases:>6} {c.total_spent:>14}"
        )


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--name", default=None)
@click.option("--phone", default=None)
@click.option("--email", default=None)
@click.option("--address", default=None)
@pass_container
def customer_update(
    container: Container,
    customer_id: str,
    name: str | None,
    phone: str | None,
    email: str | None,
    address: str | None,
) -> None:
    """Update a customer's contact details."""
    try:
        dto = container.update_customer().handle(
            customer_id, name=name, phone=phone, email=email, address=address
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} updated.")


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@pass_container
def customer_delete(container: Container, customer_id: str) -> None:
    """Remove a customer."""
    try:
        container.delete_customer().handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {customer_id} deleted.")
