"""Cart aggregate: what the cashier builds before checkout.

The cart is immutable: every operation returns a new ``Cart`` and leaves
the receiver untouched, so whoever owns the checkout session decides
which state is current.  Operations that receive nonsense (zero
quantities, non-positive prices, unknown product ids) are silent no-ops,
matching how the till behaves when the cashier fat-fingers a field.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum

from pos.domain.exceptions import ValidationError
from pos.domain.model.pricing import CartTotals, cart_totals, line_total
from pos.domain.model.product import DEFAULT_CATEGORY, Product
from pos.domain.model.value_objects import Money

LEGACY_AD_HOC_PREFIX = "temp_"


class ProductKind(Enum):
    CATALOG = "catalog"
    AD_HOC = "ad_hoc"


@dataclass(frozen=True)
class ProductRef:
    """Snapshot of the product a line refers to.

    ``CATALOG`` refs point at a stored product and move its stock.
    ``AD_HOC`` refs are one-off items typed in at the till; they have a
    generated id and no catalog, stock or cost backing.
    """

    id: str
    name: str
    category: str = DEFAULT_CATEGORY
    kind: ProductKind = ProductKind.CATALOG
    cost_price: Money | None = None

    @property
    def tracks_stock(self) -> bool:
        return self.kind is ProductKind.CATALOG

    @staticmethod
    def from_product(product: Product) -> ProductRef:
        if product.id is None:
            raise ValidationError("Cannot reference an unsaved product")
        return ProductRef(
            id=product.id,
            name=product.name,
            category=product.category,
            cost_price=product.cost_price,
        )

    @staticmethod
    def ad_hoc(name: str, category: str = DEFAULT_CATEGORY) -> ProductRef:
        return ProductRef(
            id=f"adhoc-{uuid.uuid4().hex[:12]}",
            name=name,
            category=category,
            kind=ProductKind.AD_HOC,
        )

    @staticmethod
    def kind_for_id(product_id: str, declared: str | None = None) -> ProductKind:
        """Resolve the kind of a stored ref, honouring old ``temp_`` ids."""
        if declared is not None:
            return ProductKind(declared)
        if product_id.startswith(LEGACY_AD_HOC_PREFIX):
            return ProductKind.AD_HOC
        return ProductKind.CATALOG


@dataclass(frozen=True)
class CartLine:
    product: ProductRef
    quantity: int
    original_unit_price: Money
    current_unit_price: Money
    list_unit_price: Money | None = None

    @property
    def line_total(self) -> Money:
        return line_total(self.current_unit_price, self.quantity)

    @property
    def catalog_price(self) -> Money:
        """Price the line was added at, before any markup raised ``original_unit_price``."""
        return self.list_unit_price or self.original_unit_price


def _priced(original: Money, current: Money) -> tuple[Money, Money]:
    # A sale price above list becomes the original price for this line;
    # the catalog price stays on the line as ``list_unit_price``.
    if current > original:
        return current, current
    return original, current


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    # --- Queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def totals(self) -> CartTotals:
        return cart_totals(self.lines)

    def get(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product.id == product_id:
                return line
        return None

    # --- Operations (each returns a new cart) ---------------------------------

    def add_item(
        self,
        product: Product | ProductRef,
        quantity: int = 1,
        original_price: Money | None = None,
        current_price: Money | None = None,
        list_price: Money | None = None,
    ) -> Cart:
        """Add ``quantity`` of ``product``; merges into an existing line.

        ``list_price`` is required for an ad-hoc ``ProductRef`` that has no
        catalog price; for catalog products it defaults to ``product.price``.
        """
        if not _is_positive_int(quantity):
            return self

        ref = product if isinstance(product, ProductRef) else ProductRef.from_product(product)
        existing = self.get(ref.id)
        if existing is not None:
            merged = replace(existing, quantity=existing.quantity + quantity)
            return self._with_line(merged)

        base = list_price
        if base is None and isinstance(product, Product):
            base = product.price
        if base is None:
            base = current_price or original_price
        if base is None:
            raise ValidationError(f"No price available for '{ref.name}'")

        original, current = _priced(original_price or base, current_price or base)
        line = CartLine(
            product=ref,
            quantity=quantity,
            original_unit_price=original,
            current_unit_price=current,
            list_unit_price=original_price or base,
        )
        return Cart(self.lines + (line,))

    def remove_item(self, product_id: str) -> Cart:
        if self.get(product_id) is None:
            return self
        return Cart(tuple(line for line in self.lines if line.product.id != product_id))

    def set_quantity(self, product_id: str, quantity: int) -> Cart:
        line = self.get(product_id)
        if line is None or not _is_positive_int(quantity):
            return self
        return self._with_line(replace(line, quantity=quantity))

    def set_price(self, product_id: str, new_price: Money) -> Cart:
        """Override the sale price of one line (ad-hoc discounting)."""
        line = self.get(product_id)
        if line is None or new_price.is_zero:
            return self
        original, current = _priced(line.original_unit_price, new_price)
        return self._with_line(
            replace(line, original_unit_price=original, current_unit_price=current)
        )

    def clear(self) -> Cart:
        return Cart()

    # --- Internal helpers -----------------------------------------------------

    def _with_line(self, updated: CartLine) -> Cart:
        return Cart(
            tuple(
                updated if line.product.id == updated.product.id else line
                for line in self.lines
            )
        )
