"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer; every instance is bound to one owner's records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact (case-insensitive) name, or None."""

    @abstractmethod
    def list_all(self, category: str | None = None) -> list[Product]:
        """Return every product, optionally limited to one category."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product; assigns ``id`` to new ones."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product; raises EntityNotFoundError if absent."""

    @abstractmethod
    def list_low_stock(self, threshold: int) -> list[Product]:
        """Return products whose stock is at or below ``threshold``."""
