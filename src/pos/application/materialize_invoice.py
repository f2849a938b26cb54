"""Application service: Materialize Invoice use case.

Derives the invoice read model from a finalized order and writes it as
two independent records (invoice, then its line items).  If the second
write fails the invoice exists without detail; nothing rolls it back.
"""

from __future__ import annotations

import logging

from pos.application.dto import InvoiceDTO, to_invoice_dto
from pos.domain.model.invoice import Invoice, InvoiceItems
from pos.domain.model.order import Order
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)


class MaterializeInvoiceHandler:

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._customer_repo = customer_repo

    def handle(self, order: Order) -> InvoiceDTO:
        customer = None
        if order.customer_id:
            customer = self._customer_repo.get_by_id(order.customer_id)
            if customer is None:
                logger.warning(
                    "Customer %s on order %s not found; invoicing as walk-in",
                    order.customer_id,
                    order.order_number,
                )

        invoice = Invoice.from_order(order, customer)
        self._invoice_repo.save(invoice)

        items = InvoiceItems.from_order(invoice.id, order)  # type: ignore[arg-type]
        self._invoice_repo.save_items(items)

        logger.info("Invoice %s materialized for order %s", invoice.id, order.order_number)
        return to_invoice_dto(invoice, items)
