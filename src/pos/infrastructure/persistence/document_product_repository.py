"""DocumentStore-backed implementation of ProductRepository."""

from __future__ import annotations

from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository
from pos.infrastructure.persistence.codec import (
    money_from_raw,
    money_to_raw,
    optional_money_from_raw,
    optional_money_to_raw,
)
from pos.infrastructure.persistence.document_repository import DocumentRepository
from pos.infrastructure.persistence.document_store import Condition, OrderBy


class DocumentProductRepository(DocumentRepository, ProductRepository):

    collection = "products"

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._get(product_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.strip().lower():
                return product
        return None

    def list_all(self, category: str | None = None) -> list[Product]:
        where = [Condition("category", "==", category)] if category else []
        raws = self._query(where, OrderBy("created_at"))
        return [self._to_domain(raw) for raw in raws]

    def list_low_stock(self, threshold: int) -> list[Product]:
        raws = self._query([Condition("stock", "<=", threshold)], OrderBy("created_at"))
        return [self._to_domain(raw) for raw in raws]

    def save(self, product: Product) -> None:
        product.id = self._write(product.id, self._to_raw(product))

    def delete(self, product_id: str) -> None:
        self._remove(product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "name": product.name,
            "category": product.category,
            "price": money_to_raw(product.price),
            "cost_price": optional_money_to_raw(product.cost_price),
            "stock": product.stock,
            "sku": product.sku,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category") or "Pottery",
            price=money_from_raw(raw["price"]),
            cost_price=optional_money_from_raw(raw.get("cost_price")),
            stock=int(raw.get("stock", 0)),
            sku=raw.get("sku", ""),
        )
