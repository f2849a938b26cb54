"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves with every sale and cancellation.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Money

DEFAULT_CATEGORY = "Pottery"


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price and stock updates are
    legitimate mutations on the aggregate.  ``id`` is None until the
    repository assigns one.
    """

    id: str | None
    name: str
    price: Money
    stock: int = 0
    category: str = DEFAULT_CATEGORY
    sku: str = ""
    cost_price: Money | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError("Stock must be a non-negative integer")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def adjust_stock(self, delta: int) -> int:
        """Apply a stock movement, flooring at zero.  Returns the new level."""
        self.stock = max(0, self.stock + delta)
        return self.stock

    def is_low_stock(self, threshold: int) -> bool:
        return self.stock <= threshold

    @property
    def stock_value(self) -> Money:
        return self.price * self.stock
