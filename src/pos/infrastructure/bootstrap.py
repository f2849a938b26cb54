"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Repositories are built on
each access for whoever is signed in at that moment, so every one of them
only ever sees the current owner's documents.
"""

from __future__ import annotations

from pos.application.add_product import AddProductHandler
from pos.application.cancel_order import CancelOrderHandler
from pos.application.create_order import FinalizeOrderHandler
from pos.application.customers import (
    AddCustomerHandler,
    DeleteCustomerHandler,
    ListCustomersHandler,
    UpdateCustomerHandler,
)
from pos.application.delete_product import DeleteProductHandler
from pos.application.expenses import (
    AddExpenseHandler,
    DeleteExpenseHandler,
    ListExpensesHandler,
    UpdateExpenseHandler,
)
from pos.application.invoices import (
    CancelInvoiceHandler,
    InvoiceAnalyticsHandler,
    ListInvoicesHandler,
    ShowInvoiceHandler,
    UpdateInvoiceStatusHandler,
)
from pos.application.list_products import ListProductsHandler
from pos.application.order_number import OrderNumberGenerator
from pos.application.record_payment import RecordPaymentHandler
from pos.application.reports import ReportsHandler
from pos.application.show_order import ListOrdersHandler, ShowOrderHandler
from pos.application.update_product import UpdateProductHandler
from pos.domain.model.user import AuthProvider, require_user
from pos.domain.model.value_objects import set_currency_symbol
from pos.infrastructure.auth import ConfigAuthProvider
from pos.infrastructure.config import Settings
from pos.infrastructure.persistence.document_customer_repository import (
    DocumentCustomerRepository,
)
from pos.infrastructure.persistence.document_expense_repository import (
    DocumentExpenseRepository,
)
from pos.infrastructure.persistence.document_invoice_repository import (
    DocumentInvoiceRepository,
)
from pos.infrastructure.persistence.document_order_repository import (
    DocumentOrderRepository,
)
from pos.infrastructure.persistence.document_product_repository import (
    DocumentProductRepository,
)
from pos.infrastructure.persistence.document_store import DocumentStore
from pos.infrastructure.persistence.json_document_store import JsonDocumentStore


class Container:

    def __init__(
        self,
        settings: Settings,
        store: DocumentStore | None = None,
        auth: AuthProvider | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or JsonDocumentStore(settings.data_dir)
        self.auth = auth or ConfigAuthProvider(settings.user)
        set_currency_symbol("INR", settings.currency_symbol)

    @property
    def owner_id(self) -> str:
        return require_user(self.auth).uid

    # --- Repositories ---------------------------------------------------------

    @property
    def product_repo(self) -> DocumentProductRepository:
        return DocumentProductRepository(self.store, self.owner_id)

    @property
    def customer_repo(self) -> DocumentCustomerRepository:
        return DocumentCustomerRepository(self.store, self.owner_id)

    @property
    def order_repo(self) -> DocumentOrderRepository:
        return DocumentOrderRepository(self.store, self.owner_id)

    @property
    def invoice_repo(self) -> DocumentInvoiceRepository:
        return DocumentInvoiceRepository(self.store, self.owner_id)

    @property
    def expense_repo(self) -> DocumentExpenseRepository:
        return DocumentExpenseRepository(self.store, self.owner_id)

    # --- Orders ---------------------------------------------------------------

    def finalize_order(self) -> FinalizeOrderHandler:
        return FinalizeOrderHandler(
            order_repo=self.order_repo,
            product_repo=self.product_repo,
            customer_repo=self.customer_repo,
            invoice_repo=self.invoice_repo,
            number_generator=OrderNumberGenerator(self.settings.order_number_prefix),
            payment_status=self.settings.payment_status,
        )

    def cancel_order(self) -> CancelOrderHandler:
        return CancelOrderHandler(self.order_repo, self.product_repo, self.invoice_repo)

    def record_payment(self) -> RecordPaymentHandler:
        return RecordPaymentHandler(self.order_repo, self.invoice_repo)

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.order_repo)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.order_repo, self.customer_repo)

    # --- Products -------------------------------------------------------------

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.product_repo)

    def update_product(self) -> UpdateProductHandler:
        return UpdateProductHandler(self.product_repo)

    def delete_product(self) -> DeleteProductHandler:
        return DeleteProductHandler(self.product_repo)

    def list_products(self) -> ListProductsHandler:
        return ListProductsHandler(self.product_repo, self.settings.low_stock_threshold)

    # --- Customers ------------------------------------------------------------

    def add_customer(self) -> AddCustomerHandler:
        return AddCustomerHandler(self.customer_repo)

    def update_customer(self) -> UpdateCustomerHandler:
        return UpdateCustomerHandler(self.customer_repo)

    def delete_customer(self) -> DeleteCustomerHandler:
        return DeleteCustomerHandler(self.customer_repo)

    def list_customers(self) -> ListCustomersHandler:
        return ListCustomersHandler(self.customer_repo)

    # --- Invoices -------------------------------------------------------------

    def show_invoice(self) -> ShowInvoiceHandler:
        return ShowInvoiceHandler(self.invoice_repo)

    def list_invoices(self) -> ListInvoicesHandler:
        return ListInvoicesHandler(self.invoice_repo)

    def update_invoice_status(self) -> UpdateInvoiceStatusHandler:
        return UpdateInvoiceStatusHandler(self.invoice_repo)

    def cancel_invoice(self) -> CancelInvoiceHandler:
        return CancelInvoiceHandler(self.invoice_repo)

    def invoice_analytics(self) -> InvoiceAnalyticsHandler:
        return InvoiceAnalyticsHandler(self.invoice_repo)

    # --- Expenses -------------------------------------------------------------

    def add_expense(self) -> AddExpenseHandler:
        return AddExpenseHandler(self.expense_repo)

    def update_expense(self) -> UpdateExpenseHandler:
        return UpdateExpenseHandler(self.expense_repo)

    def delete_expense(self) -> DeleteExpenseHandler:
        return DeleteExpenseHandler(self.expense_repo)

    def list_expenses(self) -> ListExpensesHandler:
        return ListExpensesHandler(self.expense_repo)

    # --- Reports --------------------------------------------------------------

    def reports(self) -> ReportsHandler:
        return ReportsHandler(
            order_repo=self.order_repo,
            product_repo=self.product_repo,
            customer_repo=self.customer_repo,
            expense_repo=self.expense_repo,
            low_stock_threshold=self.settings.low_stock_threshold,
            dashboard_low_stock_threshold=self.settings.dashboard_low_stock_threshold,
            cogs_ratio=self.settings.cogs_ratio,
            top_customers_limit=self.settings.top_customers_limit,
        )
