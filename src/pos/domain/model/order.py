"""Order aggregate: a finalized sale.

An order is written once at checkout with its money fields already
computed from the cart.  Afterwards only two things change: payments
against an outstanding balance (advance billing) and the
COMPLETED -> CANCELLED transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pos.domain.exceptions import EmptyCartError, ValidationError
from pos.domain.model.cart import Cart, CartLine, ProductRef
from pos.domain.model.pricing import cart_totals, discount_percentage
from pos.domain.model.value_objects import Money


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLineItem:
    """Price snapshot of one cart line at checkout time."""

    product: ProductRef
    quantity: int
    original_unit_price: Money
    current_unit_price: Money
    list_unit_price: Money | None = None

    @property
    def line_total(self) -> Money:
        return self.current_unit_price * self.quantity

    @property
    def line_subtotal(self) -> Money:
        return self.original_unit_price * self.quantity

    @property
    def discount_percentage(self) -> Decimal:
        return discount_percentage(self.original_unit_price, self.current_unit_price)

    @property
    def catalog_price(self) -> Money:
        return self.list_unit_price or self.original_unit_price

    @property
    def markup(self) -> Money:
        """Per-unit amount the original price was raised above the catalog price."""
        if self.catalog_price >= self.original_unit_price:
            return Money.zero()
        return self.original_unit_price - self.catalog_price

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLineItem:
        return OrderLineItem(
            product=line.product,
            quantity=line.quantity,
            original_unit_price=line.original_unit_price,
            current_unit_price=line.current_unit_price,
            list_unit_price=line.catalog_price,
        )


@dataclass
class Order:
    """Aggregate root for sales.

    Use ``Order.create()`` for new orders; it computes the money fields.
    The ``__init__`` stays plain so the repository can reconstitute stored
    orders without recomputing anything.
    """

    id: str | None
    order_number: str
    items: list[OrderLineItem]
    subtotal: Money
    discount: Money
    discount_percentage: Decimal
    after_discount: Money
    total: Money
    payment_method: str
    customer_id: str | None = None
    status: OrderStatus = OrderStatus.COMPLETED
    payment_status: PaymentStatus = PaymentStatus.PAID
    created_at: datetime = field(default_factory=_utc_now)
    cancelled_at: datetime | None = None
    cancel_reason: str = ""
    advance_amount: Money = field(default_factory=Money.zero)
    remaining_amount: Money = field(default_factory=Money.zero)
    paid_at: datetime | None = None
    final_payment_method: str = ""
    refund_advance: bool = False

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        cart: Cart,
        payment_method: str,
        customer_id: str | None = None,
        payment_status: PaymentStatus = PaymentStatus.PAID,
        created_at: datetime | None = None,
        advance_amount: Money | None = None,
    ) -> Order:
        """Build a new order from ``cart``.

        With ``advance_amount`` the order is advance-billed: the customer
        pays part now, ``remaining_amount`` is the balance and the payment
        status is PARTIAL (PAID when the advance covers the total).
        Without it, a PENDING payment status leaves the whole total
        outstanding.
        """
        if cart.is_empty:
            raise EmptyCartError("Cannot create an order from an empty cart")
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        items = [OrderLineItem.from_cart_line(line) for line in cart]
        totals = cart_totals(items)
        total = totals.after_discount

        advance = Money.zero()
        remaining = Money.zero()
        if advance_amount is not None:
            if advance_amount.is_zero or advance_amount > total:
                raise ValidationError(
                    f"Invalid advance amount {advance_amount}: must be above zero "
                    f"and at most the order total {total}"
                )
            advance = advance_amount
            remaining = total - advance
            payment_status = PaymentStatus.PARTIAL if not remaining.is_zero else PaymentStatus.PAID
        elif payment_status is PaymentStatus.PENDING:
            remaining = total
        elif payment_status is PaymentStatus.PARTIAL:
            raise ValidationError("A partial payment needs an advance amount")

        when = created_at or _utc_now()
        return Order(
            id=None,
            order_number=order_number,
            items=items,
            subtotal=totals.subtotal,
            discount=totals.discount,
            discount_percentage=totals.discount_percentage,
            after_discount=totals.after_discount,
            total=total,
            payment_method=payment_method.strip(),
            customer_id=customer_id or None,
            status=OrderStatus.COMPLETED,
            payment_status=payment_status,
            created_at=when,
            advance_amount=advance,
            remaining_amount=remaining,
            paid_at=when if payment_status is PaymentStatus.PAID else None,
        )

    # --- State transitions ----------------------------------------------------

    def record_payment(
        self, amount: Money, payment_method: str, when: datetime | None = None
    ) -> None:
        """Take a payment against the outstanding balance.

        The balance reaching zero flips the payment status to PAID.
        """
        if self.is_cancelled:
            raise ValidationError(f"Order {self.order_number} is cancelled")
        if self.remaining_amount.is_zero:
            raise ValidationError(f"Order {self.order_number} is already fully paid")
        if amount.is_zero:
            raise ValidationError("Payment amount must be greater than zero")
        if amount > self.remaining_amount:
            raise ValidationError(
                f"Payment {amount} exceeds the remaining balance {self.remaining_amount}"
            )
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")

        self.advance_amount = self.advance_amount + amount
        self.remaining_amount = self.remaining_amount - amount
        if self.remaining_amount.is_zero:
            self.payment_status = PaymentStatus.PAID
            self.paid_at = when or _utc_now()
            self.final_payment_method = payment_method.strip()
        else:
            self.payment_status = PaymentStatus.PARTIAL

    def cancel(
        self,
        reason: str = "",
        when: datetime | None = None,
        refund_advance: bool = False,
    ) -> None:
        """Transition to CANCELLED.

        Stock restoration is the caller's job and must happen only when
        this call succeeds, so a second cancel never restores twice.
        ``refund_advance`` is only recorded when money was taken in advance.
        """
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError(f"Order {self.order_number} is already cancelled")
        self.status = OrderStatus.CANCELLED
        self.cancelled_at = when or _utc_now()
        self.cancel_reason = reason
        self.refund_advance = refund_advance and not self.advance_amount.is_zero

    # --- Computed properties --------------------------------------------------

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    @property
    def is_advance_billed(self) -> bool:
        return not self.advance_amount.is_zero

    @property
    def amount_paid(self) -> Money:
        return self.total - self.remaining_amount

    @property
    def is_walk_in(self) -> bool:
        return self.customer_id is None

    @property
    def stock_lines(self) -> list[OrderLineItem]:
        """Lines that are backed by catalog stock."""
        return [item for item in self.items if item.product.tracks_stock]

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)
