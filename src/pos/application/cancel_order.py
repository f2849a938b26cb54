"""Application service: Cancel Order use case.

Marks the order cancelled, puts catalog stock back and cancels the
matching invoice.  When money was taken in advance the caller says
whether it is refunded; the flag is stored on the order.  Cancelling an
order that is already cancelled changes nothing and restores nothing.
Customer statistics are left alone: they count checkout activity over
the customer's lifetime.
"""

from __future__ import annotations

import logging

from pos.application.dto import CancelOrderResult, to_order_dto
from pos.application.show_order import find_order
from pos.domain.exceptions import DomainException
from pos.domain.repository.invoice_repository import InvoiceRepository
from pos.domain.repository.order_repository import OrderRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        invoice_repo: InvoiceRepository,
    ) -> None:
        self._order_repo = order_repo
        self._stock = StockService(product_repo)
        self._invoice_repo = invoice_repo

    def handle(
        self, order_ref: str, reason: str = "", refund_advance: bool = False
    ) -> CancelOrderResult:
        order = find_order(self._order_repo, order_ref)
        if order.is_cancelled:
            logger.info("Order %s is already cancelled; nothing to do", order.order_number)
            return CancelOrderResult(order=to_order_dto(order), already_cancelled=True)

        # Persist the status first so a retry after a crash cannot restore twice.
        order.cancel(reason, refund_advance=refund_advance)
        self._order_repo.save(order)
        logger.info("Order %s cancelled", order.order_number)
        if order.refund_advance:
            logger.info(
                "Advance of %s on order %s to be refunded",
                order.advance_amount,
                order.order_number,
            )

        failed = [f"stock:{pid}" for pid in self._stock.restore_order(order)]

        try:
            invoice = self._invoice_repo.get_by_order_number(order.order_number)
            if invoice is None:
                logger.warning("No invoice found for order %s", order.order_number)
                failed.append("invoice")
            else:
                invoice.cancel(reason, order.cancelled_at)
                self._invoice_repo.save(invoice)
        except DomainException as exc:
            logger.warning("Invoice for order %s not cancelled: %s", order.order_number, exc)
            failed.append("invoice")

        return CancelOrderResult(order=to_order_dto(order), failed_side_effects=tuple(failed))
