"""Integration tests for ReportsHandler over fake repositories."""

from datetime import date, datetime
from decimal import Decimal

from pos.application.reports import ReportsHandler
from pos.domain.model.cart import Cart, ProductRef
from pos.domain.model.customer import Customer
from pos.domain.model.expense import Expense
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.service.reporting import ReportWindow
from tests.fakes import (
    FakeCustomerRepository,
    FakeExpenseRepository,
    FakeOrderRepository,
    FakeProductRepository,
)

MAY = ReportWindow(date(2024, 5, 1), date(2024, 5, 31))


def _at(day: int, month: int = 5) -> datetime:
    return datetime(2024, month, day, 12, 0).astimezone()


def _handler(**settings) -> ReportsHandler:
    products = FakeProductRepository([
        Product(id=None, name="Vase", price=Money.of("100"), stock=5),
        Product(id=None, name="Pot", price=Money.of("50"), stock=20),
        Product(id=None, name="Jar", price=Money.of("80"), stock=7, category="Storage"),
    ])
    customers = FakeCustomerRepository([Customer(id=None, name="Asha", phone="98450")])
    orders = FakeOrderRepository()
    for number, total, day, month, customer in [
        ("MA-1", "600", 2, 5, "c1"),
        ("MA-2", "400", 9, 5, None),
        ("MA-3", "800", 2, 6, "c1"),
    ]:
        cart = Cart().add_item(ProductRef.ad_hoc("Bowl"), 1, list_price=Money.of(total))
        orders.save(Order.create(number, cart, "Cash", customer, created_at=_at(day, month)))
    expenses = FakeExpenseRepository([
        Expense(id=None, title="Clay", amount=Money.of("100"), category="Materials", date=_at(3)),
        Expense(id=None, title="Rent", amount=Money.of("900"), category="Rent", date=_at(3, 6)),
    ])
    return ReportsHandler(orders, products, customers, expenses, **settings)


class TestReportsHandler:

    def test_sales(self):
        rows = _handler().sales(MAY)
        assert [r.total_sales for r in rows] == [Decimal("600"), Decimal("400")]

    def test_inventory_uses_report_threshold(self):
        rows = {r.category: r for r in _handler().inventory()}
        assert rows["Pottery"].total_value == Decimal("1500")
        assert rows["Pottery"].low_stock_items == 1
        assert rows["Storage"].low_stock_items == 1

    def test_inventory_threshold_configurable(self):
        rows = {r.category: r for r in _handler(low_stock_threshold=6).inventory()}
        assert rows["Storage"].low_stock_items == 0

    def test_customers(self):
        (row,) = _handler().customers(MAY)
        assert (row.name, row.total_spent) == ("Asha", Decimal("600"))

    def test_expenses(self):
        (row,) = _handler().expenses(MAY)
        assert (row.category, row.total_expenses) == ("Materials", Decimal("100"))

    def test_profit_and_loss(self):
        pnl = _handler().profit_and_loss(MAY)
        assert pnl.total_sales == Decimal("1000")
        assert pnl.cost_of_goods_sold == Decimal("600")
        assert pnl.net_profit == Decimal("300")
        assert pnl.profit_margin == Decimal("30.00")

    def test_cogs_ratio_configurable(self):
        pnl = _handler(cogs_ratio=Decimal("0.5")).profit_and_loss(MAY)
        assert pnl.cost_of_goods_sold == Decimal("500")

    def test_dashboard_uses_dashboard_threshold(self):
        summary = _handler().dashboard(today=date(2024, 6, 5))
        assert summary.total_orders == 3
        assert summary.total_sales == Decimal("1800")
        assert summary.low_stock_products == 1
        assert summary.monthly_expenses == Decimal("900")
        assert summary.last_7_days[3].total_sales == Decimal("800")
