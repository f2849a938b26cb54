"""Report and dashboard aggregation.

Every function here is pure: it receives already-loaded records and
recomputes its dataset from scratch.  Nothing is cached or maintained
incrementally.  Calendar grouping uses the local timezone, the way the
shop's staff read dates.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from pos.domain.exceptions import ValidationError
from pos.domain.model.customer import Customer
from pos.domain.model.expense import Expense
from pos.domain.model.invoice import Invoice
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.model.value_objects import CENTS, Money

HUNDRED = Decimal("100")
ZERO = Decimal("0")

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_DASHBOARD_LOW_STOCK_THRESHOLD = 5
DEFAULT_COGS_RATIO = Decimal("0.6")
DEFAULT_TOP_CUSTOMERS = 10


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _ratio(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return ZERO
    return _round(part / whole * HUNDRED)


def local_date(moment: datetime) -> date:
    return moment.astimezone().date()


@dataclass(frozen=True)
class ReportWindow:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError(
                f"Report window ends ({self.end}) before it starts ({self.start})"
            )

    def contains(self, moment: datetime | date) -> bool:
        day = local_date(moment) if isinstance(moment, datetime) else moment
        return self.start <= day <= self.end

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, datetime.min.time()).astimezone()

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.end, datetime.max.time()).astimezone()

    @staticmethod
    def last_days(days: int, today: date | None = None) -> ReportWindow:
        today = today or date.today()
        return ReportWindow(today - timedelta(days=days - 1), today)


# ---------------------------------------------------------------------------
# Result rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SalesDay:
    date: date
    total_sales: Decimal
    order_count: int


@dataclass(frozen=True)
class CategoryInventory:
    category: str
    item_count: int
    total_stock: int
    total_value: Decimal
    low_stock_items: int


@dataclass(frozen=True)
class CustomerSpend:
    customer_id: str
    name: str
    phone: str
    total_spent: Decimal


@dataclass(frozen=True)
class ExpenseCategory:
    category: str
    total_expenses: Decimal
    count: int
    average_expense: Decimal


@dataclass(frozen=True)
class ProfitAndLoss:
    total_sales: Decimal
    total_orders: int
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal


@dataclass(frozen=True)
class ProductSales:
    product_id: str
    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    total_sales: Decimal
    total_orders: int
    total_customers: int
    total_products: int
    low_stock_products: int
    monthly_expenses: Decimal
    last_7_days: list[SalesDay] = field(default_factory=list)
    top_products: list[ProductSales] = field(default_factory=list)
    recent_orders: list[Order] = field(default_factory=list)


@dataclass(frozen=True)
class InvoiceAnalytics:
    total_invoices: int
    total_revenue: Decimal
    total_discount: Decimal
    average_order_value: Decimal
    revenue_by_payment_method: dict[str, Decimal]
    revenue_by_day: dict[date, Decimal]


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------


def _sales_in(orders: Iterable[Order], window: ReportWindow | None) -> list[Order]:
    return [
        order
        for order in orders
        if not order.is_cancelled and (window is None or window.contains(order.created_at))
    ]


def sales_by_day(orders: Iterable[Order], window: ReportWindow) -> list[SalesDay]:
    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[date, int] = defaultdict(int)
    for order in _sales_in(orders, window):
        day = local_date(order.created_at)
        totals[day] += order.total.amount
        counts[day] += 1
    return [SalesDay(day, totals[day], counts[day]) for day in sorted(totals)]


def inventory_by_category(
    products: Iterable[Product],
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[CategoryInventory]:
    groups: dict[str, list[Product]] = defaultdict(list)
    for product in products:
        groups[product.category].append(product)

    return [
        CategoryInventory(
            category=category,
            item_count=len(members),
            total_stock=sum(p.stock for p in members),
            total_value=Money.total(p.stock_value for p in members).amount,
            low_stock_items=sum(1 for p in members if p.is_low_stock(low_stock_threshold)),
        )
        for category, members in groups.items()
    ]


def top_customers(
    orders: Iterable[Order],
    customers: Iterable[Customer],
    window: ReportWindow,
    limit: int = DEFAULT_TOP_CUSTOMERS,
) -> list[CustomerSpend]:
    spending: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for order in _sales_in(orders, window):
        if order.customer_id:
            spending[order.customer_id] += order.total.amount

    ranked = [
        CustomerSpend(c.id, c.name, c.phone, spending[c.id])
        for c in customers
        if c.id is not None and spending.get(c.id, ZERO) > 0
    ]
    ranked.sort(key=lambda row: row.total_spent, reverse=True)
    return ranked[:limit]


def expenses_by_category(
    expenses: Iterable[Expense], window: ReportWindow
) -> list[ExpenseCategory]:
    groups: dict[str, list[Decimal]] = defaultdict(list)
    for expense in expenses:
        if window.contains(expense.date):
            groups[expense.category].append(expense.amount.amount)

    return [
        ExpenseCategory(
            category=category,
            total_expenses=sum(amounts, ZERO),
            count=len(amounts),
            average_expense=_round(sum(amounts, ZERO) / len(amounts)),
        )
        for category, amounts in groups.items()
    ]


def cost_of_goods(
    orders: Iterable[Order],
    products: Iterable[Product],
    cogs_ratio: Decimal = DEFAULT_COGS_RATIO,
) -> Decimal:
    """Cost of what was sold.

    Uses the catalog cost price when one is known (falling back to the
    cost captured on the line), otherwise estimates the cost as
    ``cogs_ratio`` of the line's selling total.
    """
    cost_prices = {p.id: p.cost_price for p in products if p.cost_price is not None}
    cost = ZERO
    for order in orders:
        for item in order.items:
            unit_cost = cost_prices.get(item.product.id) or item.product.cost_price
            if unit_cost is not None:
                cost += (unit_cost * item.quantity).amount
            else:
                cost += item.line_total.scale(cogs_ratio).amount
    return cost


def profit_and_loss(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    products: Iterable[Product],
    window: ReportWindow,
    cogs_ratio: Decimal = DEFAULT_COGS_RATIO,
) -> ProfitAndLoss:
    sales = _sales_in(orders, window)
    total_sales = sum((order.total.amount for order in sales), ZERO)
    total_expenses = sum(
        (e.amount.amount for e in expenses if window.contains(e.date)), ZERO
    )
    cogs = _round(cost_of_goods(sales, products, cogs_ratio))
    gross_profit = total_sales - cogs
    net_profit = gross_profit - total_expenses
    return ProfitAndLoss(
        total_sales=total_sales,
        total_orders=len(sales),
        cost_of_goods_sold=cogs,
        gross_profit=gross_profit,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=_ratio(net_profit, total_sales),
    )


def top_products(orders: Iterable[Order], limit: int = 5) -> list[ProductSales]:
    names: dict[str, str] = {}
    quantities: dict[str, int] = defaultdict(int)
    revenue: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for order in _sales_in(orders, None):
        for item in order.items:
            names[item.product.id] = item.product.name
            quantities[item.product.id] += item.quantity
            revenue[item.product.id] += item.line_total.amount

    ranked = [
        ProductSales(pid, names[pid], quantities[pid], revenue[pid]) for pid in names
    ]
    ranked.sort(key=lambda row: row.revenue, reverse=True)
    return ranked[:limit]


def dashboard_summary(
    orders: list[Order],
    products: list[Product],
    customers: list[Customer],
    expenses: list[Expense],
    today: date | None = None,
    low_stock_threshold: int = DEFAULT_DASHBOARD_LOW_STOCK_THRESHOLD,
) -> DashboardSummary:
    today = today or date.today()
    completed = _sales_in(orders, None)
    monthly_expenses = sum(
        (
            e.amount.amount
            for e in expenses
            if local_date(e.date).year == today.year and local_date(e.date).month == today.month
        ),
        ZERO,
    )

    week = ReportWindow.last_days(7, today)
    by_day = {row.date: row for row in sales_by_day(completed, week)}
    last_7_days = [
        by_day.get(day, SalesDay(day, ZERO, 0))
        for day in (week.start + timedelta(days=n) for n in range(7))
    ]

    recent = sorted(completed, key=lambda o: o.created_at, reverse=True)[:5]
    return DashboardSummary(
        total_sales=sum((o.total.amount for o in completed), ZERO),
        total_orders=len(completed),
        total_customers=len(customers),
        total_products=len(products),
        low_stock_products=sum(1 for p in products if p.is_low_stock(low_stock_threshold)),
        monthly_expenses=monthly_expenses,
        last_7_days=last_7_days,
        top_products=top_products(completed),
        recent_orders=recent,
    )


def invoice_analytics(invoices: Iterable[Invoice]) -> InvoiceAnalytics:
    invoices = list(invoices)
    revenue = sum((inv.total.amount for inv in invoices), ZERO)
    by_method: dict[str, Decimal] = defaultdict(lambda: ZERO)
    by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for inv in invoices:
        by_method[inv.payment_method or "Unknown"] += inv.total.amount
        by_day[local_date(inv.invoice_date)] += inv.total.amount

    return InvoiceAnalytics(
        total_invoices=len(invoices),
        total_revenue=revenue,
        total_discount=sum((inv.discount.amount for inv in invoices), ZERO),
        average_order_value=_round(revenue / len(invoices)) if invoices else ZERO,
        revenue_by_payment_method=dict(by_method),
        revenue_by_day=dict(sorted(by_day.items())),
    )
