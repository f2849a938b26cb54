"""Unit tests for the stock and customer statistics services."""

from datetime import datetime, timezone

import pytest

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.cart import Cart, ProductRef
from pos.domain.model.customer import Customer
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.service.customer_stats_service import CustomerStatsService
from pos.domain.service.stock_service import StockService
from tests.fakes import FakeCustomerRepository, FakeProductRepository


def _setup() -> tuple[StockService, FakeProductRepository]:
    repo = FakeProductRepository([
        Product(id=None, name="Vase", price=Money.of("100"), stock=10),
        Product(id=None, name="Pot", price=Money.of("500"), stock=1),
    ])
    return StockService(repo), repo


def _order(repo: FakeProductRepository, vases: int, pots: int) -> Order:
    cart = (
        Cart()
        .add_item(repo.get_by_name("Vase"), vases)
        .add_item(repo.get_by_name("Pot"), pots)
        .add_item(ProductRef.ad_hoc("Gift wrap"), 1, list_price=Money.of("20"))
    )
    return Order.create("MA-1", cart, "Cash")


class TestAdjustStock:

    def test_adjusts_and_saves(self):
        service, repo = _setup()
        product = service.adjust_stock("p1", -3)
        assert product.stock == 7
        assert repo.get_by_id("p1").stock == 7

    def test_floors_at_zero(self):
        service, repo = _setup()
        service.adjust_stock("p2", -5)
        assert repo.get_by_id("p2").stock == 0

    def test_missing_product(self):
        service, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            service.adjust_stock("nope", 1)


class TestOrderStockMovements:

    def test_apply_order_decrements_catalog_lines(self):
        service, repo = _setup()
        failed = service.apply_order(_order(repo, 2, 1))
        assert failed == []
        assert repo.get_by_id("p1").stock == 8
        assert repo.get_by_id("p2").stock == 0

    def test_restore_returns_stock_to_start(self):
        service, repo = _setup()
        order = _order(repo, 4, 1)
        service.apply_order(order)
        service.restore_order(order)
        assert repo.get_by_id("p1").stock == 10
        assert repo.get_by_id("p2").stock == 1

    def test_missing_product_reported_not_raised(self):
        service, repo = _setup()
        order = _order(repo, 1, 1)
        repo.delete("p2")
        assert service.apply_order(order) == ["p2"]
        assert repo.get_by_id("p1").stock == 9


class TestCustomerStats:

    def test_bump(self):
        repo = FakeCustomerRepository([Customer(id=None, name="Asha", phone="98450")])
        when = datetime(2024, 6, 1, tzinfo=timezone.utc)
        CustomerStatsService(repo).bump("c1", Money.of("400"), when)
        customer = repo.get_by_id("c1")
        assert customer.total_purchases == 1
        assert customer.total_spent == Money.of("400")
        assert customer.last_purchase == when

    def test_unknown_customer(self):
        with pytest.raises(EntityNotFoundError):
            CustomerStatsService(FakeCustomerRepository()).bump("c9", Money.of("1"))
