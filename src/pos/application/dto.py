"""Data Transfer Objects returned by the application handlers.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money values are
pre-formatted for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from pos.domain.model.invoice import Invoice, InvoiceItems
from pos.domain.model.order import Order

DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CartLineSpec:
    """Input: one catalog line the cashier asked for."""

    product_id: str
    quantity: int
    price: str | None = None  # sale price override


@dataclass(frozen=True)
class AdHocLineSpec:
    """Input: a one-off item with no catalog entry."""

    name: str
    quantity: int
    price: str
    category: str = "Pottery"


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    original_price: str
    unit_price: str
    discount_percentage: str
    line_total: str
    ad_hoc: bool = False


@dataclass(frozen=True)
class OrderDTO:
    id: str
    order_number: str
    customer_id: str | None
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineItemDTO]
    subtotal: str
    discount: str
    discount_percentage: str
    total: str
    created_at: str
    cancelled_at: str | None = None
    amount_paid: str = ""
    remaining_amount: str = ""
    paid_at: str | None = None
    refund_advance: bool = False


@dataclass(frozen=True)
class InvoiceLineDTO:
    product_name: str
    category: str
    quantity: int
    original_price: str
    final_price: str
    discount_percentage: str
    total: str


@dataclass(frozen=True)
class InvoiceDTO:
    id: str
    order_number: str
    customer_name: str
    customer_phone: str
    item_count: int
    subtotal: str
    discount: str
    discount_percentage: str
    total: str
    payment_method: str
    payment_status: str
    status: str
    invoice_date: str
    items: list[InvoiceLineDTO] = field(default_factory=list)


@dataclass(frozen=True)
class FinalizeOrderResult:
    """Outcome of checkout.

    The order is always persisted when this is returned.  Anything listed
    in ``failed_side_effects`` (stock, customer stats, invoice) did not get
    written and is not retried.
    """

    order: OrderDTO
    invoice: InvoiceDTO | None
    failed_side_effects: tuple[str, ...] = ()

    @property
    def fully_applied(self) -> bool:
        return not self.failed_side_effects


@dataclass(frozen=True)
class CancelOrderResult:
    order: OrderDTO
    already_cancelled: bool = False
    failed_side_effects: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecordPaymentResult:
    order: OrderDTO
    fully_paid: bool
    failed_side_effects: tuple[str, ...] = ()


# --- Mapping ------------------------------------------------------------------


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method,
        items=[
            OrderLineItemDTO(
                product_id=item.product.id,
                product_name=item.product.name,
                quantity=item.quantity,
                original_price=str(item.original_unit_price),
                unit_price=str(item.current_unit_price),
                discount_percentage=f"{item.discount_percentage:.2f}%",
                line_total=str(item.line_total),
                ad_hoc=not item.product.tracks_stock,
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        discount=str(order.discount),
        discount_percentage=f"{order.discount_percentage:.2f}%",
        total=str(order.total),
        created_at=format_date(order.created_at),
        cancelled_at=format_date(order.cancelled_at) if order.cancelled_at else None,
        amount_paid=str(order.amount_paid),
        remaining_amount=str(order.remaining_amount),
        paid_at=format_date(order.paid_at) if order.paid_at else None,
        refund_advance=order.refund_advance,
    )


def to_invoice_dto(invoice: Invoice, items: InvoiceItems | None = None) -> InvoiceDTO:
    return InvoiceDTO(
        id=invoice.id,  # type: ignore[arg-type]
        order_number=invoice.order_number,
        customer_name=invoice.customer_name,
        customer_phone=invoice.customer_phone,
        item_count=invoice.item_count,
        subtotal=str(invoice.subtotal),
        discount=str(invoice.discount),
        discount_percentage=f"{invoice.discount_percentage:.2f}%",
        total=str(invoice.total),
        payment_method=invoice.payment_method,
        payment_status=invoice.payment_status.value,
        status=invoice.status.value,
        invoice_date=format_date(invoice.invoice_date),
        items=[
            InvoiceLineDTO(
                product_name=line.product_name,
                category=line.category,
                quantity=line.quantity,
                original_price=str(line.original_price),
                final_price=str(line.final_price),
                discount_percentage=f"{line.discount_percentage:.2f}%",
                total=str(line.total),
            )
            for line in (items.items if items else [])
        ],
    )


def format_date(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(DATE_FORMAT)
