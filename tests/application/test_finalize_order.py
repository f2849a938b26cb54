"""Integration tests for checkout (FinalizeOrder use case).

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from pos.application.create_order import FinalizeOrderHandler, build_cart
from pos.application.dto import AdHocLineSpec, CartLineSpec
from pos.application.order_number import OrderNumberGenerator
from pos.domain.exceptions import EmptyCartError, EntityNotFoundError, StoreError
from pos.domain.model.cart import Cart
from pos.domain.model.customer import Customer
from pos.domain.model.order import PaymentStatus
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from tests.fakes import (
    FakeCustomerRepository,
    FakeInvoiceRepository,
    FakeOrderRepository,
    FakeProductRepository,
)


class BrokenInvoiceRepository(FakeInvoiceRepository):

    def save(self, invoice) -> None:
        raise StoreError("invoices unavailable")


class Shop:
    """Handler plus the fakes behind it."""

    def __init__(self, invoice_repo: FakeInvoiceRepository | None = None, **kwargs) -> None:
        self.products = FakeProductRepository([
            Product(id=None, name="Vase", price=Money.of("100"), stock=10),
            Product(id=None, name="Pot", price=Money.of("500"), stock=3),
        ])
        self.customers = FakeCustomerRepository([
            Customer(id=None, name="Asha Rao", phone="98450"),
        ])
        self.orders = FakeOrderRepository()
        self.invoices = invoice_repo or FakeInvoiceRepository()
        self.handler = FinalizeOrderHandler(
            self.orders,
            self.products,
            self.customers,
            self.invoices,
            number_generator=OrderNumberGenerator("MA", clock_ms=lambda: 36**3),
            **kwargs,
        )

    def cart(self, *lines, ad_hoc=()) -> Cart:
        return build_cart(self.products, [CartLineSpec(*line) for line in lines], ad_hoc)


class TestFinalizeHappyPath:

    def test_walk_in_order(self):
        shop = Shop()
        result = shop.handler.handle(shop.cart(("p1", 2)), payment_method="Cash")
        assert result.fully_applied
        assert result.order.subtotal == "₹200.00"
        assert result.order.discount == "₹0.00"
        assert result.order.total == "₹200.00"
        assert result.order.status == "completed"
        assert result.order.payment_status == "paid"
        assert result.order.order_number.startswith("MA-1000")

    def test_persists_order(self):
        shop = Shop()
        result = shop.handler.handle(shop.cart(("p1", 1)), "Cash")
        assert shop.orders.get_by_id(result.order.id) is not None

    def test_discount_from_price_override(self):
        shop = Shop()
        result = shop.handler.handle(shop.cart(("p2", 1, "400")), "UPI")
        assert result.order.discount == "₹100.00"
        assert result.order.discount_percentage == "20.00%"
        assert result.order.total == "₹400.00"

    def test_stock_decremented(self):
        shop = Shop()
        shop.handler.handle(shop.cart(("p1", 4), ("p2", 1)), "Cash")
        assert shop.products.get_by_id("p1").stock == 6
        assert shop.products.get_by_id("p2").stock == 2

    def test_ad_hoc_lines_skip_stock(self):
        shop = Shop()
        cart = shop.cart(("p1", 1), ad_hoc=[AdHocLineSpec("Name plate", 2, "150")])
        result = shop.handler.handle(cart, "Cash")
        assert result.fully_applied
        assert result.order.total == "₹400.00"
        assert [item.ad_hoc for item in result.order.items] == [False, True]
        assert shop.products.get_by_id("p1").stock == 9

    def test_customer_stats_bumped(self):
        shop = Shop()
        shop.handler.handle(shop.cart(("p1", 3)), "Cash", customer_id="c1")
        customer = shop.customers.get_by_id("c1")
        assert customer.total_purchases == 1
        assert customer.total_spent == Money.of("300")

    def test_invoice_materialized_with_same_totals(self):
        shop = Shop()
        result = shop.handler.handle(shop.cart(("p2", 2, "450")), "Card", customer_id="c1")
        invoice = result.invoice
        assert invoice is not None
        assert invoice.customer_name == "Asha Rao"
        assert (invoice.subtotal, invoice.discount, invoice.total) == (
            result.order.subtotal,
            result.order.discount,
            result.order.total,
        )
        assert len(invoice.items) == 1
        stored = shop.invoices.get_by_order_number(result.order.order_number)
        assert stored.total == Money.of("900")

    def test_payment_status_is_configurable(self):
        shop = Shop(payment_status=PaymentStatus.PENDING)
        result = shop.handler.handle(shop.cart(("p1", 1)), "Credit")
        assert result.order.payment_status == "pending"


class TestFinalizeFailures:

    def test_empty_cart_rejected(self):
        shop = Shop()
        with pytest.raises(EmptyCartError):
            shop.handler.handle(Cart(), "Cash")
        assert shop.orders.list() == []

    def test_unknown_product_in_cart_spec(self):
        shop = Shop()
        with pytest.raises(EntityNotFoundError):
            shop.cart(("nope", 1))

    def test_unknown_customer_degrades_to_walk_in_invoice(self):
        shop = Shop()
        result = shop.handler.handle(shop.cart(("p1", 1)), "Cash", customer_id="ghost")
        assert result.failed_side_effects == ("customer_stats:ghost",)
        assert result.invoice.customer_name == "Walk-in Customer"
        assert shop.orders.get_by_id(result.order.id) is not None

    def test_invoice_failure_is_reported_not_raised(self):
        shop = Shop(invoice_repo=BrokenInvoiceRepository())
        result = shop.handler.handle(shop.cart(("p1", 2)), "Cash")
        assert result.invoice is None
        assert result.failed_side_effects == ("invoice",)
        assert not result.fully_applied
        # The order and its stock movement stand.
        assert shop.orders.get_by_id(result.order.id) is not None
        assert shop.products.get_by_id("p1").stock == 8

    def test_deleted_product_reported_as_stock_failure(self):
        shop = Shop()
        cart = shop.cart(("p1", 1), ("p2", 1))
        shop.products.delete("p2")
        result = shop.handler.handle(cart, "Cash")
        assert result.failed_side_effects == ("stock:p2",)
        assert shop.products.get_by_id("p1").stock == 9
