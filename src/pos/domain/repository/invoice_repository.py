"""Abstract repository for invoices and their line-item records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from pos.domain.model.invoice import Invoice, InvoiceItems, InvoiceStatus


class InvoiceRepository(ABC):

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Invoice | None:
        """Return an invoice by ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Invoice | None:
        """Return the invoice materialized for an order, or None."""

    @abstractmethod
    def list(
        self,
        status: InvoiceStatus | None = None,
        customer_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = None,
    ) -> list[Invoice]:
        """Return matching invoices, newest first."""

    @abstractmethod
    def save(self, invoice: Invoice) -> None:
        """Persist a new or updated invoice; assigns ``id`` to new ones."""

    @abstractmethod
    def save_items(self, items: InvoiceItems) -> None:
        """Persist the line-item record belonging to an invoice."""

    @abstractmethod
    def get_items(self, invoice_id: str) -> InvoiceItems | None:
        """Return the line-item record for an invoice, or None."""
