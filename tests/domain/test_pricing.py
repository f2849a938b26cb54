"""Unit tests for line and cart arithmetic."""

from decimal import Decimal

import pytest

from pos.domain.exceptions import ValidationError
from pos.domain.model.cart import CartLine, ProductRef
from pos.domain.model.pricing import (
    CartTotals,
    cart_totals,
    discount_percentage,
    line_total,
    percentage,
)
from pos.domain.model.value_objects import Money


def _line(qty: int, original: str, current: str) -> CartLine:
    return CartLine(
        product=ProductRef(id=f"p-{original}-{current}", name="Bowl"),
        quantity=qty,
        original_unit_price=Money.of(original),
        current_unit_price=Money.of(current),
    )


class TestLineTotal:

    def test_multiplies_price_by_quantity(self):
        assert line_total(Money.of("12.50"), 4) == Money.of("50.00")

    @pytest.mark.parametrize("qty", [0, -2])
    def test_non_positive_quantity_rejected(self, qty):
        with pytest.raises(ValidationError, match="positive integer"):
            line_total(Money.of("10"), qty)

    def test_fractional_quantity_rejected(self):
        with pytest.raises(ValidationError):
            line_total(Money.of("10"), 1.5)  # type: ignore[arg-type]


class TestPercentages:

    def test_percentage_rounds_to_two_places(self):
        assert percentage(Money.of("1"), Money.of("3")) == Decimal("33.33")

    def test_percentage_of_zero_is_zero(self):
        assert percentage(Money.of("5"), Money.zero()) == Decimal("0")

    def test_discount_percentage(self):
        assert discount_percentage(Money.of("500"), Money.of("400")) == Decimal("20.00")

    def test_markup_is_not_a_negative_discount(self):
        assert discount_percentage(Money.of("100"), Money.of("120")) == Decimal("0")


class TestCartTotals:

    def test_empty_cart_is_all_zero(self):
        assert cart_totals([]) == CartTotals.empty()

    def test_full_price_lines(self):
        totals = cart_totals([_line(2, "100", "100"), _line(1, "50", "50")])
        assert totals.subtotal == Money.of("250")
        assert totals.after_discount == Money.of("250")
        assert totals.discount.is_zero
        assert totals.discount_percentage == Decimal("0")

    def test_discounted_lines(self):
        totals = cart_totals([_line(1, "500", "400"), _line(2, "100", "100")])
        assert totals.subtotal == Money.of("700")
        assert totals.after_discount == Money.of("600")
        assert totals.discount == Money.of("100")
        assert totals.discount_percentage == Decimal("14.29")

    @pytest.mark.parametrize(
        "lines",
        [
            [(1, "10", "9.99")],
            [(3, "250", "125"), (7, "19.99", "19.99")],
            [(1, "0.01", "0.01"), (100, "1000", "1")],
        ],
    )
    def test_subtotal_never_below_after_discount(self, lines):
        totals = cart_totals([_line(*entry) for entry in lines])
        assert totals.subtotal >= totals.after_discount
