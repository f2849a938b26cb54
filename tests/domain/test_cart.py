"""Unit tests for the immutable Cart aggregate."""

from decimal import Decimal

import pytest

from pos.domain.exceptions import ValidationError
from pos.domain.model.cart import Cart, ProductKind, ProductRef
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money


def _vase() -> Product:
    return Product(id="p1", name="Vase", price=Money.of("100"), stock=10)


def _pot() -> Product:
    return Product(id="p2", name="Pot", price=Money.of("500"), stock=3)


class TestAddItem:

    def test_adds_line_at_catalog_price(self):
        cart = Cart().add_item(_vase(), 2)
        line = cart.get("p1")
        assert line is not None
        assert line.quantity == 2
        assert line.original_unit_price == Money.of("100")
        assert line.current_unit_price == Money.of("100")

    def test_same_product_merges_into_one_line(self):
        cart = Cart().add_item(_vase(), 2).add_item(_vase(), 3)
        assert len(cart) == 1
        assert cart.get("p1").quantity == 5

    def test_returns_new_cart(self):
        empty = Cart()
        cart = empty.add_item(_vase())
        assert empty.is_empty
        assert len(cart) == 1

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_is_noop(self, qty):
        cart = Cart().add_item(_vase(), 1)
        assert cart.add_item(_pot(), qty) is cart

    def test_sale_price_below_list(self):
        cart = Cart().add_item(_pot(), 1, current_price=Money.of("400"))
        totals = cart.totals
        assert totals.discount == Money.of("100")
        assert totals.discount_percentage == Decimal("20.00")

    def test_price_above_list_raises_the_original(self):
        cart = Cart().add_item(_vase(), 1, current_price=Money.of("120"))
        line = cart.get("p1")
        assert line.original_unit_price == Money.of("120")
        assert cart.totals.discount.is_zero
        assert line.catalog_price == Money.of("100")

    def test_unsaved_product_rejected(self):
        with pytest.raises(ValidationError, match="unsaved"):
            Cart().add_item(Product(id=None, name="Jug", price=Money.of("10")))

    def test_ad_hoc_item_needs_a_price(self):
        with pytest.raises(ValidationError, match="No price"):
            Cart().add_item(ProductRef.ad_hoc("Custom mug"), 1)

    def test_ad_hoc_item(self):
        ref = ProductRef.ad_hoc("Custom mug", "Gifts")
        cart = Cart().add_item(ref, 2, list_price=Money.of("250"))
        line = cart.get(ref.id)
        assert line.product.kind is ProductKind.AD_HOC
        assert not line.product.tracks_stock
        assert line.line_total == Money.of("500")


class TestCartEdits:

    def test_remove_item(self):
        cart = Cart().add_item(_vase()).add_item(_pot())
        assert [line.product.id for line in cart.remove_item("p1")] == ["p2"]

    def test_remove_unknown_is_noop(self):
        cart = Cart().add_item(_vase())
        assert cart.remove_item("nope") is cart

    def test_set_quantity(self):
        cart = Cart().add_item(_vase()).set_quantity("p1", 4)
        assert cart.get("p1").quantity == 4

    @pytest.mark.parametrize("qty", [0, -3])
    def test_set_quantity_non_positive_is_noop(self, qty):
        cart = Cart().add_item(_vase())
        assert cart.set_quantity("p1", qty) is cart

    def test_set_price_discounts_the_line(self):
        cart = Cart().add_item(_pot()).set_price("p2", Money.of("450"))
        line = cart.get("p2")
        assert line.original_unit_price == Money.of("500")
        assert line.current_unit_price == Money.of("450")

    def test_markup_keeps_the_catalog_price(self):
        cart = Cart().add_item(_pot()).set_price("p2", Money.of("600"))
        line = cart.get("p2")
        assert line.original_unit_price == Money.of("600")
        assert line.list_unit_price == Money.of("500")
        assert cart.totals.subtotal == Money.of("600")

    def test_set_price_zero_is_noop(self):
        cart = Cart().add_item(_pot())
        assert cart.set_price("p2", Money.zero()) is cart

    def test_set_price_unknown_is_noop(self):
        cart = Cart().add_item(_pot())
        assert cart.set_price("nope", Money.of("1")) is cart

    def test_clear(self):
        assert Cart().add_item(_vase()).clear().is_empty


class TestProductKind:

    def test_legacy_temp_ids_are_ad_hoc(self):
        assert ProductRef.kind_for_id("temp_1700000000") is ProductKind.AD_HOC

    def test_plain_ids_are_catalog(self):
        assert ProductRef.kind_for_id("abc123") is ProductKind.CATALOG

    def test_declared_kind_wins(self):
        assert ProductRef.kind_for_id("temp_1", "catalog") is ProductKind.CATALOG
