"""Application service: reports and the dashboard (queries).

Loads the owner's records and hands them to the pure aggregations in
``pos.domain.service.reporting``.  Every call recomputes from scratch.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pos.domain.model.order import Order
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.expense_repository import ExpenseRepository
from pos.domain.repository.order_repository import OrderRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.service import reporting
from pos.domain.service.reporting import (
    CategoryInventory,
    CustomerSpend,
    DashboardSummary,
    ExpenseCategory,
    ProfitAndLoss,
    ReportWindow,
    SalesDay,
)


class ReportsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        expense_repo: ExpenseRepository,
        low_stock_threshold: int = reporting.DEFAULT_LOW_STOCK_THRESHOLD,
        dashboard_low_stock_threshold: int = reporting.DEFAULT_DASHBOARD_LOW_STOCK_THRESHOLD,
        cogs_ratio: Decimal = reporting.DEFAULT_COGS_RATIO,
        top_customers_limit: int = reporting.DEFAULT_TOP_CUSTOMERS,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._customer_repo = customer_repo
        self._expense_repo = expense_repo
        self._low_stock_threshold = low_stock_threshold
        self._dashboard_low_stock_threshold = dashboard_low_stock_threshold
        self._cogs_ratio = cogs_ratio
        self._top_customers_limit = top_customers_limit

    def sales(self, window: ReportWindow) -> list[SalesDay]:
        return reporting.sales_by_day(self._orders_in(window), window)

    def inventory(self) -> list[CategoryInventory]:
        return reporting.inventory_by_category(
            self._product_repo.list_all(), self._low_stock_threshold
        )

    def customers(self, window: ReportWindow) -> list[CustomerSpend]:
        return reporting.top_customers(
            self._orders_in(window),
            self._customer_repo.list_all(),
            window,
            self._top_customers_limit,
        )

    def expenses(self, window: ReportWindow) -> list[ExpenseCategory]:
        return reporting.expenses_by_category(
            self._expense_repo.list(start=window.start_at, end=window.end_at), window
        )

    def profit_and_loss(self, window: ReportWindow) -> ProfitAndLoss:
        return reporting.profit_and_loss(
            self._orders_in(window),
            self._expense_repo.list(start=window.start_at, end=window.end_at),
            self._product_repo.list_all(),
            window,
            self._cogs_ratio,
        )

    def dashboard(self, today: date | None = None) -> DashboardSummary:
        return reporting.dashboard_summary(
            orders=self._order_repo.list(),
            products=self._product_repo.list_all(),
            customers=self._customer_repo.list_all(),
            expenses=self._expense_repo.list(),
            today=today,
            low_stock_threshold=self._dashboard_low_stock_threshold,
        )

    def _orders_in(self, window: ReportWindow) -> list[Order]:
        return self._order_repo.list(start=window.start_at, end=window.end_at)
