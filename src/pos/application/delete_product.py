"""Application service: Delete Product use case.

Orders keep their own snapshot of every product they sold, so removing a
product never rewrites history.
"""

from __future__ import annotations

from pos.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        self._product_repo.delete(product_id)
