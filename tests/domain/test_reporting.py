"""Unit tests for the report aggregations."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pos.domain.exceptions import ValidationError
from pos.domain.model.cart import Cart, ProductRef
from pos.domain.model.customer import Customer
from pos.domain.model.expense import Expense
from pos.domain.model.invoice import Invoice
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.service import reporting
from pos.domain.service.reporting import ReportWindow

MAY = ReportWindow(date(2024, 5, 1), date(2024, 5, 31))


def _at(day: int, month: int = 5, hour: int = 12) -> datetime:
    return datetime(2024, month, day, hour, 0).astimezone()


def _ad_hoc_order(
    total: str, day: int, customer_id: str | None = None, month: int = 5
) -> Order:
    cart = Cart().add_item(ProductRef.ad_hoc("Bowl"), 1, list_price=Money.of(total))
    return Order.create(
        f"MA-{day}-{total}", cart, "Cash", customer_id, created_at=_at(day, month)
    )


def _expense(amount: str, category: str, when: datetime) -> Expense:
    return Expense(id=None, title=category, amount=Money.of(amount), category=category, date=when)


class TestReportWindow:

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            ReportWindow(date(2024, 5, 2), date(2024, 5, 1))

    def test_inclusive_bounds(self):
        assert MAY.contains(date(2024, 5, 1))
        assert MAY.contains(_at(31, hour=23))
        assert not MAY.contains(date(2024, 6, 1))

    def test_last_days(self):
        window = ReportWindow.last_days(7, date(2024, 5, 10))
        assert window.start == date(2024, 5, 4)
        assert window.end == date(2024, 5, 10)


class TestSalesByDay:

    def test_groups_by_day_and_skips_cancelled(self):
        cancelled = _ad_hoc_order("999", 3)
        cancelled.cancel()
        orders = [
            _ad_hoc_order("100", 2),
            _ad_hoc_order("50", 2),
            _ad_hoc_order("70", 5),
            _ad_hoc_order("10", 1, month=6),
            cancelled,
        ]
        rows = reporting.sales_by_day(orders, MAY)
        assert [(r.date, r.total_sales, r.order_count) for r in rows] == [
            (date(2024, 5, 2), Decimal("150"), 2),
            (date(2024, 5, 5), Decimal("70"), 1),
        ]


class TestInventoryByCategory:

    def test_category_totals(self):
        products = [
            Product(id="p1", name="A", price=Money.of("100"), stock=5),
            Product(id="p2", name="B", price=Money.of("50"), stock=20),
        ]
        (row,) = reporting.inventory_by_category(products)
        assert row.category == "Pottery"
        assert row.item_count == 2
        assert row.total_stock == 25
        assert row.total_value == Decimal("1500")
        assert row.low_stock_items == 1

    def test_threshold_is_configurable(self):
        products = [Product(id="p1", name="A", price=Money.of("1"), stock=7)]
        (row,) = reporting.inventory_by_category(products, low_stock_threshold=5)
        assert row.low_stock_items == 0


class TestTopCustomers:

    def test_ranks_known_customers_with_spend(self):
        customers = [
            Customer(id="c1", name="Asha", phone="1"),
            Customer(id="c2", name="Ravi", phone="2"),
            Customer(id="c3", name="Idle", phone="3"),
        ]
        orders = [
            _ad_hoc_order("100", 2, "c1"),
            _ad_hoc_order("300", 3, "c2"),
            _ad_hoc_order("250", 4, "c1"),
            _ad_hoc_order("80", 5),
            _ad_hoc_order("500", 6, "ghost"),
        ]
        rows = reporting.top_customers(orders, customers, MAY)
        assert [(r.customer_id, r.total_spent) for r in rows] == [
            ("c1", Decimal("350")),
            ("c2", Decimal("300")),
        ]

    def test_limit(self):
        customers = [Customer(id=f"c{i}", name=f"C{i}", phone=str(i)) for i in range(3)]
        orders = [_ad_hoc_order(str(10 + i), 2 + i, f"c{i}") for i in range(3)]
        assert len(reporting.top_customers(orders, customers, MAY, limit=2)) == 2


class TestExpensesByCategory:

    def test_groups_within_window(self):
        expenses = [
            _expense("100", "Clay", _at(2)),
            _expense("200", "Clay", _at(9)),
            _expense("50", "Rent", _at(9)),
            _expense("999", "Clay", _at(1, month=6)),
        ]
        rows = {r.category: r for r in reporting.expenses_by_category(expenses, MAY)}
        assert rows["Clay"].total_expenses == Decimal("300")
        assert rows["Clay"].count == 2
        assert rows["Clay"].average_expense == Decimal("150.00")
        assert rows["Rent"].count == 1


class TestProfitAndLoss:

    def test_estimated_cogs_without_cost_prices(self):
        pnl = reporting.profit_and_loss(
            [_ad_hoc_order("600", 2), _ad_hoc_order("400", 3)],
            [_expense("100", "Clay", _at(4))],
            [],
            MAY,
        )
        assert pnl.total_sales == Decimal("1000")
        assert pnl.total_orders == 2
        assert pnl.cost_of_goods_sold == Decimal("600")
        assert pnl.gross_profit == Decimal("400")
        assert pnl.total_expenses == Decimal("100")
        assert pnl.net_profit == Decimal("300")
        assert pnl.profit_margin == Decimal("30.00")

    def test_catalog_cost_price_used_per_line(self):
        vase = Product(
            id="p1", name="Vase", price=Money.of("100"), stock=5, cost_price=Money.of("30")
        )
        cart = (
            Cart()
            .add_item(vase, 2)
            .add_item(ProductRef.ad_hoc("Plate"), 1, list_price=Money.of("100"))
        )
        order = Order.create("MA-1", cart, "Cash", created_at=_at(10))
        pnl = reporting.profit_and_loss([order], [], [vase], MAY)
        # 2 x 30 at cost, plus 60% of the ad-hoc line
        assert pnl.cost_of_goods_sold == Decimal("120.00")

    def test_no_sales_has_zero_margin(self):
        pnl = reporting.profit_and_loss([], [_expense("10", "Misc", _at(2))], [], MAY)
        assert pnl.net_profit == Decimal("-10")
        assert pnl.profit_margin == Decimal("0")


class TestDashboard:

    def test_summary(self):
        today = date(2024, 5, 10)
        products = [
            Product(id="p1", name="A", price=Money.of("10"), stock=5),
            Product(id="p2", name="B", price=Money.of("10"), stock=6),
        ]
        cancelled = _ad_hoc_order("999", 9)
        cancelled.cancel()
        orders = [_ad_hoc_order("100", 9), _ad_hoc_order("50", 10), cancelled]
        expenses = [
            _expense("40", "Clay", _at(3)),
            _expense("70", "Clay", _at(28, month=4)),
        ]
        summary = reporting.dashboard_summary(
            orders, products, [Customer(id="c1", name="A", phone="1")], expenses, today=today
        )
        assert summary.total_sales == Decimal("150")
        assert summary.total_orders == 2
        assert summary.total_customers == 1
        assert summary.total_products == 2
        assert summary.low_stock_products == 1
        assert summary.monthly_expenses == Decimal("40")
        assert len(summary.last_7_days) == 7
        assert summary.last_7_days[-1].total_sales == Decimal("50")
        assert summary.last_7_days[0].total_sales == Decimal("0")
        assert [o.order_number for o in summary.recent_orders] == ["MA-10-50", "MA-9-100"]


class TestInvoiceAnalytics:

    def test_totals(self):
        invoices = [
            Invoice.from_order(_ad_hoc_order("100", 2)),
            Invoice.from_order(_ad_hoc_order("300", 3)),
        ]
        invoices[1].payment_method = "UPI"
        stats = reporting.invoice_analytics(invoices)
        assert stats.total_invoices == 2
        assert stats.total_revenue == Decimal("400")
        assert stats.average_order_value == Decimal("200.00")
        assert stats.revenue_by_payment_method == {"Cash": Decimal("100"), "UPI": Decimal("300")}
        assert list(stats.revenue_by_day) == [date(2024, 5, 2), date(2024, 5, 3)]

    def test_empty(self):
        stats = reporting.invoice_analytics([])
        assert stats.total_invoices == 0
        assert stats.average_order_value == Decimal("0")
