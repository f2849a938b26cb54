"""Application service: Update Product use case."""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        cost_price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
    ) -> Product:
        """Update the fields that were given; leave the rest alone.

        This does NOT affect any existing orders: they captured a
        price snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if price is not None:
            product.update_price(Money.of(price))
        if cost_price is not None:
            product.cost_price = Money.of(cost_price)
        if stock is not None:
            if stock < 0:
                raise ValidationError("Stock must be a non-negative integer")
            product.stock = stock
        if category is not None:
            if not category.strip():
                raise ValidationError("Category must not be empty")
            product.category = category.strip()

        self._product_repo.save(product)
        return product
