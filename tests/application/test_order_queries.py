"""Integration tests for order lookups, listings and numbering."""

import pytest

from pos.application.cancel_order import CancelOrderHandler
from pos.application.create_order import FinalizeOrderHandler, build_cart
from pos.application.dto import CartLineSpec
from pos.application.order_number import OrderNumberGenerator
from pos.application.show_order import ListOrdersHandler, ShowOrderHandler
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.customer import Customer
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from tests.fakes import (
    FakeCustomerRepository,
    FakeInvoiceRepository,
    FakeOrderRepository,
    FakeProductRepository,
)


@pytest.fixture
def shop():
    products = FakeProductRepository([
        Product(id=None, name="Vase", price=Money.of("100"), stock=50),
    ])
    customers = FakeCustomerRepository([Customer(id=None, name="Asha Rao", phone="98450")])
    orders = FakeOrderRepository()
    invoices = FakeInvoiceRepository()
    finalize = FinalizeOrderHandler(orders, products, customers, invoices)
    for qty, customer in [(1, "c1"), (2, None), (3, "c1")]:
        finalize.handle(build_cart(products, [CartLineSpec("p1", qty)]), "Cash", customer)
    CancelOrderHandler(orders, products, invoices).handle("o2")
    return orders, customers


class TestShowOrder:

    def test_by_id(self, shop):
        orders, _ = shop
        assert ShowOrderHandler(orders).handle("o1").total == "₹100.00"

    def test_by_number(self, shop):
        orders, _ = shop
        number = orders.get_by_id("o3").order_number
        assert ShowOrderHandler(orders).handle(number).id == "o3"

    def test_unknown(self, shop):
        orders, _ = shop
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(orders).handle("MA-NOPE")


class TestListOrders:

    def test_filter_by_status(self, shop):
        rows = ListOrdersHandler(*shop).handle(status="cancelled")
        assert [r.id for r in rows] == ["o2"]

    def test_filter_by_customer(self, shop):
        rows = ListOrdersHandler(*shop).handle(customer_id="c1")
        assert sorted(r.id for r in rows) == ["o1", "o3"]

    def test_search_by_customer_name(self, shop):
        rows = ListOrdersHandler(*shop).handle(search="asha")
        assert sorted(r.id for r in rows) == ["o1", "o3"]

    def test_search_by_order_number(self, shop):
        orders, _ = shop
        number = orders.get_by_id("o2").order_number
        rows = ListOrdersHandler(*shop).handle(search=number.lower())
        assert [r.id for r in rows] == ["o2"]

    def test_unknown_status(self, shop):
        with pytest.raises(ValidationError, match="Unknown order status"):
            ListOrdersHandler(*shop).handle(status="shipped")


class TestOrderNumberGenerator:

    def test_format(self):
        number = OrderNumberGenerator("MA", clock_ms=lambda: 35).next_number()
        assert number.startswith("MA-Z")
        assert len(number) == len("MA-Z") + 4

    def test_numbers_differ(self):
        gen = OrderNumberGenerator()
        assert len({gen.next_number() for _ in range(20)}) == 20

    def test_empty_prefix(self):
        number = OrderNumberGenerator("", clock_ms=lambda: 36).next_number()
        assert number.startswith("10")
