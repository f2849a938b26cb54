"""Application service: List Products use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.service.reporting import DEFAULT_LOW_STOCK_THRESHOLD


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    sku: str
    category: str
    price: str
    cost_price: str
    stock: int
    low_stock: bool


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._product_repo = product_repo
        self._threshold = low_stock_threshold

    def handle(
        self,
        category: str | None = None,
        low_stock: bool = False,
        search: str | None = None,
    ) -> list[ProductDTO]:
        if low_stock:
            products = self._product_repo.list_low_stock(self._threshold)
            if category:
                products = [p for p in products if p.category == category]
        else:
            products = self._product_repo.list_all(category=category)
        if search and search.strip():
            term = search.strip().lower()
            products = [p for p in products if _matches(p, term)]
        return [self._to_dto(p) for p in products]

    def _to_dto(self, product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id or "",
            name=product.name,
            sku=product.sku,
            category=product.category,
            price=str(product.price),
            cost_price=str(product.cost_price) if product.cost_price else "",
            stock=product.stock,
            low_stock=product.is_low_stock(self._threshold),
        )


def _matches(product: Product, term: str) -> bool:
    return (
        term in product.name.lower()
        or term in product.category.lower()
        or term in product.sku.lower()
    )
