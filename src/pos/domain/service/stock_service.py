"""Domain service: stock movements driven by orders.

Stock is adjusted with a plain read-modify-write per product.  Two tills
adjusting the same product at the same moment can lose an update; the
system assumes one writer per owner at a time.
"""

from __future__ import annotations

import logging

from pos.domain.exceptions import DomainException, EntityNotFoundError
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Move stock by ``delta`` units, never below zero."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        before = product.stock
        product.adjust_stock(delta)
        self._product_repo.save(product)
        logger.debug(
            "Stock for %s moved %+d (%d -> %d)", product_id, delta, before, product.stock
        )
        return product

    def apply_order(self, order: Order) -> list[str]:
        """Take sold quantities out of stock.

        Returns the ids of products whose adjustment failed.
        """
        return self._move(order, sign=-1)

    def restore_order(self, order: Order) -> list[str]:
        """Put a cancelled order's quantities back into stock."""
        return self._move(order, sign=1)

    def _move(self, order: Order, sign: int) -> list[str]:
        failed: list[str] = []
        for line in order.stock_lines:
            try:
                self.adjust_stock(line.product.id, sign * line.quantity)
            except DomainException as exc:
                logger.warning(
                    "Stock adjustment for product %s on order %s failed: %s",
                    line.product.id,
                    order.order_number,
                    exc,
                )
                failed.append(line.product.id)
        return failed
