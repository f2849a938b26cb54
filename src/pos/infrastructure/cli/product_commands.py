"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.cli.common import pass_container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Selling price (e.g. 450.00).")
@click.option("--stock", type=int, default=0, show_default=True, help="Units on hand.")
@click.option("--category", default="Pottery", show_default=True, help="Category.")
@click.option("--cost-price", default=None, help="Purchase cost per unit.")
@click.option("--sku", default=None, help="SKU (generated when omitted).")
@pass_container
def product_add(
    container: Container,
    name: str,
    price: str,
    stock: int,
    category: str,
    cost_price: str | None,
    sku: str | None,
) -> None:
    """Add a new product to the catalog."""
    try:
        product = container.add_product().handle(
            name=name,
            price=price,
            stock=stock,
            category=category,
            cost_price=cost_price,
            sku=sku,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price} (SKU {product.sku})")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--low-stock", is_flag=True, default=False, help="Only low-stock products.")
@click.option("--search", default=None, help="Match name, category or SKU.")
@pass_container
def product_list(
    container: Container, category: str | None, low_stock: bool, search: str | None
) -> None:
    """List products in the catalog."""
    try:
        products = container.list_products().handle(
            category=category, low_stock=low_stock, search=search
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Category':<12} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 92)
    for p in products:
        flag = " !" if p.low_stock else ""
        click.echo(
            f"{p.id:<34} {p.name:<24} {p.category:<12} {p.price:>12} {p.stock:>6}{flag}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New selling price.")
@click.option("--cost-price", default=None, help="New cost price.")
@click.option("--stock", type=int, default=None, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@pass_container
def product_update(
    container: Container,
    product_id: str,
    price: str | None,
    cost_price: str | None,
    stock: int | None,
    category: str | None,
) -> None:
    """Update a product's price, cost, stock or category."""
    if price is None and cost_price is None and stock is None and category is None:
        raise click.UsageError("Nothing to update.")

    try:
        product = container.update_product().handle(
            product_id=product_id,
            price=price,
            cost_price=cost_price,
            stock=stock,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: {product.price}, stock {product.stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_container
def product_delete(container: Container, product_id: str) -> None:
    """Remove a product from the catalog."""
    try:
        container.delete_product().handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
