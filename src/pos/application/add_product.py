"""Application service: Add Product use case."""

from __future__ import annotations

import time

from pos.domain.exceptions import ValidationError
from pos.domain.model.product import DEFAULT_CATEGORY, Product
from pos.domain.model.value_objects import Money
from pos.domain.repository.product_repository import ProductRepository


def default_sku() -> str:
    return f"PRD-{time.time_ns() // 1_000_000}"


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = DEFAULT_CATEGORY,
        cost_price: str | None = None,
        sku: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        amount = Money.of(price)
        if amount.is_zero:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=None,
            name=name.strip(),
            price=amount,
            stock=stock,
            category=(category or DEFAULT_CATEGORY).strip(),
            sku=(sku or "").strip() or default_sku(),
            cost_price=Money.of(cost_price) if cost_price else None,
        )
        self._product_repo.save(product)
        return product
