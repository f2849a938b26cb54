"""Invoice read model: a denormalized, searchable view of one order.

An invoice copies the order's money fields verbatim; it never recomputes
them.  Line detail lives in a separate ``InvoiceItems`` record so invoice
listings stay small.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pos.domain.model.customer import Customer
from pos.domain.model.order import Order, PaymentStatus
from pos.domain.model.value_objects import Money

WALK_IN_NAME = "Walk-in Customer"


class InvoiceStatus(Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


@dataclass
class Invoice:

    id: str | None
    order_number: str
    customer_id: str | None
    customer_name: str
    customer_phone: str
    customer_email: str
    item_count: int
    subtotal: Money
    discount: Money
    discount_percentage: Decimal
    total: Money
    payment_method: str
    payment_status: PaymentStatus
    invoice_date: datetime
    status: InvoiceStatus = InvoiceStatus.ACTIVE
    search_terms: list[str] = field(default_factory=list)
    cancel_reason: str = ""
    cancelled_at: datetime | None = None
    updated_at: datetime | None = None

    @staticmethod
    def from_order(order: Order, customer: Customer | None = None) -> Invoice:
        name = customer.name if customer else WALK_IN_NAME
        phone = customer.phone if customer else ""
        email = customer.email if customer else ""
        return Invoice(
            id=None,
            order_number=order.order_number,
            customer_id=order.customer_id,
            customer_name=name,
            customer_phone=phone,
            customer_email=email,
            item_count=len(order.items),
            subtotal=order.subtotal,
            discount=order.discount,
            discount_percentage=order.discount_percentage,
            total=order.total,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            invoice_date=order.created_at,
            search_terms=build_search_terms(order, customer),
        )

    def set_status(self, status: InvoiceStatus, when: datetime | None = None) -> None:
        self.status = status
        self.updated_at = when or datetime.now(timezone.utc)

    def set_payment_status(self, payment_status: PaymentStatus, when: datetime | None = None) -> None:
        self.payment_status = payment_status
        self.updated_at = when or datetime.now(timezone.utc)

    def cancel(self, reason: str = "", when: datetime | None = None) -> None:
        when = when or datetime.now(timezone.utc)
        self.set_status(InvoiceStatus.CANCELLED, when)
        self.cancel_reason = reason
        self.cancelled_at = when

    def matches(self, term: str) -> bool:
        term = term.strip().lower()
        return any(term in candidate for candidate in self.search_terms)


def build_search_terms(order: Order, customer: Customer | None) -> list[str]:
    terms = [
        order.order_number.lower(),
        customer.name.lower() if customer else "walk-in",
        customer.phone if customer else "",
    ]
    terms.extend(item.product.name.lower() for item in order.items)
    return [term for term in terms if term]


@dataclass(frozen=True)
class InvoiceLine:
    product_id: str
    product_name: str
    category: str
    quantity: int
    original_price: Money
    current_price: Money
    final_price: Money
    discount_percentage: Decimal
    subtotal: Money
    total: Money


@dataclass
class InvoiceItems:
    invoice_id: str
    order_number: str
    items: list[InvoiceLine]
    id: str | None = None

    @staticmethod
    def from_order(invoice_id: str, order: Order) -> InvoiceItems:
        return InvoiceItems(
            invoice_id=invoice_id,
            order_number=order.order_number,
            items=[
                InvoiceLine(
                    product_id=item.product.id,
                    product_name=item.product.name,
                    category=item.product.category,
                    quantity=item.quantity,
                    original_price=item.original_unit_price,
                    current_price=item.current_unit_price,
                    final_price=item.current_unit_price,
                    discount_percentage=item.discount_percentage,
                    subtotal=item.line_subtotal,
                    total=item.line_total,
                )
                for item in order.items
            ],
        )
