"""Application service: Finalize Order (checkout) use case.

Turns a cart into a persisted order, then applies the follow-up writes:
stock movement, customer statistics, invoice.  Those follow-ups are
separate writes with no transaction around them.  Each one that fails is
logged and reported back in ``FinalizeOrderResult.failed_side_effects``;
the order itself is never rolled back.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pos.application.dto import (
    AdHocLineSpec,
    CartLineSpec,
    FinalizeOrderResult,
    InvoiceDTO,
    to_order_dto,
)
from pos.application.materialize_invoice import MaterializeInvoiceHandler
from pos.application.order_number import OrderNumberGenerator
from pos.domain.exceptions import DomainException, EntityNotFoundError
from pos.domain.model.cart import Cart, ProductRef
from pos.domain.model.order import Order, PaymentStatus
from pos.domain.model.value_objects import Money
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.invoice_repository import InvoiceRepository
from pos.domain.repository.order_repository import OrderRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.service.customer_stats_service import CustomerStatsService
from pos.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


def build_cart(
    product_repo: ProductRepository,
    lines: Iterable[CartLineSpec] = (),
    ad_hoc_lines: Iterable[AdHocLineSpec] = (),
    cart: Cart | None = None,
) -> Cart:
    """Resolve catalog ids and fold every requested line into a cart."""
    cart = cart or Cart()
    for entry in lines:
        product = product_repo.get_by_id(entry.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{entry.product_id}' not found")
        cart = cart.add_item(product, entry.quantity)
        if entry.price is not None:
            cart = cart.set_price(product.id, Money.of(entry.price))  # type: ignore[arg-type]

    for entry in ad_hoc_lines:
        price = Money.of(entry.price)
        cart = cart.add_item(
            ProductRef.ad_hoc(entry.name, entry.category), entry.quantity, list_price=price
        )
    return cart


class FinalizeOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        invoice_repo: InvoiceRepository,
        number_generator: OrderNumberGenerator | None = None,
        payment_status: PaymentStatus = PaymentStatus.PAID,
    ) -> None:
        self._order_repo = order_repo
        self._stock = StockService(product_repo)
        self._customer_stats = CustomerStatsService(customer_repo)
        self._invoices = MaterializeInvoiceHandler(invoice_repo, customer_repo)
        self._numbers = number_generator or OrderNumberGenerator()
        self._payment_status = payment_status

    def handle(
        self,
        cart: Cart,
        payment_method: str,
        customer_id: str | None = None,
        advance_amount: str | Money | None = None,
    ) -> FinalizeOrderResult:
        """Check out ``cart``.

        ``advance_amount`` makes this an advance-billed order: only that much
        is taken now and the rest stays outstanding until paid.

        Steps:
        1. Build the order; the aggregate computes every money field.
        2. Persist it.  A failure here propagates and nothing else runs.
        3. Apply stock, customer stats and invoice, each on its own.
        """
        order = Order.create(
            order_number=self._numbers.next_number(),
            cart=cart,
            payment_method=payment_method,
            customer_id=customer_id,
            payment_status=self._payment_status,
            advance_amount=_as_money(advance_amount),
        )
        self._order_repo.save(order)
        logger.info(
            "Order %s created: %d lines, total %s",
            order.order_number,
            len(order.items),
            order.total,
        )

        failed = [f"stock:{pid}" for pid in self._stock.apply_order(order)]

        if order.customer_id:
            try:
                self._customer_stats.bump(order.customer_id, order.total, order.created_at)
            except DomainException as exc:
                logger.warning(
                    "Customer stats for order %s not updated: %s", order.order_number, exc
                )
                failed.append(f"customer_stats:{order.customer_id}")

        invoice: InvoiceDTO | None = None
        try:
            invoice = self._invoices.handle(order)
        except DomainException as exc:
            logger.warning("Invoice for order %s not created: %s", order.order_number, exc)
            failed.append("invoice")

        return FinalizeOrderResult(
            order=to_order_dto(order),
            invoice=invoice,
            failed_side_effects=tuple(failed),
        )


def _as_money(amount: str | Money | None) -> Money | None:
    if amount is None or isinstance(amount, Money):
        return amount
    return Money.of(amount)
