"""Application service: Record Payment use case.

Takes a payment against an order that still has a balance (advance
billing, or checkout with a pending payment status) and mirrors the new
payment status onto the order's invoice.
"""

from __future__ import annotations

import logging

from pos.application.dto import RecordPaymentResult, to_order_dto
from pos.application.show_order import find_order
from pos.domain.exceptions import DomainException
from pos.domain.model.value_objects import Money
from pos.domain.repository.invoice_repository import InvoiceRepository
from pos.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class RecordPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        invoice_repo: InvoiceRepository,
    ) -> None:
        self._order_repo = order_repo
        self._invoice_repo = invoice_repo

    def handle(
        self, order_ref: str, amount: str | Money, payment_method: str = "Cash"
    ) -> RecordPaymentResult:
        order = find_order(self._order_repo, order_ref)
        payment = amount if isinstance(amount, Money) else Money.of(amount)

        order.record_payment(payment, payment_method)
        self._order_repo.save(order)
        logger.info(
            "Payment of %s recorded on order %s; %s remaining",
            payment,
            order.order_number,
            order.remaining_amount,
        )

        failed: list[str] = []
        try:
            invoice = self._invoice_repo.get_by_order_number(order.order_number)
            if invoice is None:
                logger.warning("No invoice found for order %s", order.order_number)
                failed.append("invoice")
            else:
                invoice.set_payment_status(order.payment_status)
                self._invoice_repo.save(invoice)
        except DomainException as exc:
            logger.warning(
                "Invoice payment status for order %s not updated: %s", order.order_number, exc
            )
            failed.append("invoice")

        return RecordPaymentResult(
            order=to_order_dto(order),
            fully_paid=order.remaining_amount.is_zero,
            failed_side_effects=tuple(failed),
        )
