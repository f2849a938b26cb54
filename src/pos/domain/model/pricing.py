"""Pure money arithmetic for cart lines and whole orders.

Nothing in here touches storage.  A "priced line" is anything that exposes
``quantity`` (int), ``original_unit_price`` and ``current_unit_price``
(both Money); cart lines and order line items both qualify.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import CENTS, Money

HUNDRED = Decimal("100")


class PricedLine(Protocol):
    quantity: int
    original_unit_price: Money
    current_unit_price: Money


@dataclass(frozen=True)
class CartTotals:
    subtotal: Money
    after_discount: Money
    discount: Money
    discount_percentage: Decimal

    @staticmethod
    def empty() -> CartTotals:
        return CartTotals(Money.zero(), Money.zero(), Money.zero(), Decimal("0"))


def line_total(unit_price: Money, quantity: int) -> Money:
    """Price of ``quantity`` units.

    Raises ValidationError for a non-positive or non-integer quantity.
    Negative prices cannot reach here because Money rejects them.
    """
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError(f"Quantity must be a positive integer, got {quantity!r}")
    return unit_price * quantity


def percentage(part: Money, whole: Money) -> Decimal:
    """``part / whole × 100`` to two places; 0 when ``whole`` is zero."""
    if whole.is_zero:
        return Decimal("0")
    return (part.amount / whole.amount * HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)


def discount_percentage(original_price: Money, final_price: Money) -> Decimal:
    """Per-unit markdown as a percentage of the original price."""
    if original_price.is_zero or final_price >= original_price:
        return Decimal("0")
    return percentage(original_price - final_price, original_price)


def cart_totals(lines: Iterable[PricedLine]) -> CartTotals:
    subtotal = Money.zero()
    after_discount = Money.zero()
    for line in lines:
        subtotal = subtotal + line_total(line.original_unit_price, line.quantity)
        after_discount = after_discount + line_total(line.current_unit_price, line.quantity)

    discount = subtotal - after_discount
    return CartTotals(
        subtotal=subtotal,
        after_discount=after_discount,
        discount=discount,
        discount_percentage=percentage(discount, subtotal),
    )
