"""DocumentStore-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pos.domain.model.order import Order, OrderLineItem, OrderStatus, PaymentStatus
from pos.domain.repository.order_repository import OrderRepository
from pos.infrastructure.persistence.codec import (
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
    optional_money_from_raw,
    product_ref_from_raw,
    product_ref_to_raw,
)
from pos.infrastructure.persistence.document_repository import DocumentRepository
from pos.infrastructure.persistence.document_store import Condition, OrderBy


class DocumentOrderRepository(DocumentRepository, OrderRepository):

    collection = "orders"

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._get(order_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_number(self, order_number: str) -> Order | None:
        raws = self._query([Condition("order_number", "==", order_number)], limit=1)
        return self._to_domain(raws[0]) if raws else None

    def list(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        where: list[Condition] = []
        if status is not None:
            where.append(Condition("status", "==", status.value))
        if customer_id:
            where.append(Condition("customer_id", "==", customer_id))
        if start is not None:
            where.append(Condition("created_at", ">=", start))
        if end is not None:
            where.append(Condition("created_at", "<=", end))
        raws = self._query(where, OrderBy("created_at"), limit)
        return [self._to_domain(raw) for raw in raws]

    def save(self, order: Order) -> None:
        order.id = self._write(order.id, self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "items": [
                {
                    "product": product_ref_to_raw(item.product),
                    "quantity": item.quantity,
                    "original_price": money_to_raw(item.original_unit_price),
                    "current_price": money_to_raw(item.current_unit_price),
                    "list_price": money_to_raw(item.catalog_price),
                    "discount": str(item.discount_percentage),
                    "line_total": money_to_raw(item.line_total),
                }
                for item in order.items
            ],
            "subtotal": money_to_raw(order.subtotal),
            "discount": money_to_raw(order.discount),
            "discount_percentage": str(order.discount_percentage),
            "after_discount": money_to_raw(order.after_discount),
            "total": money_to_raw(order.total),
            "payment_method": order.payment_method,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "created_at": dt_to_raw(order.created_at),
            "cancelled_at": dt_to_raw(order.cancelled_at),
            "cancel_reason": order.cancel_reason,
            "advance_amount": money_to_raw(order.advance_amount),
            "remaining_amount": money_to_raw(order.remaining_amount),
            "paid_at": dt_to_raw(order.paid_at),
            "final_payment_method": order.final_payment_method,
            "refund_advance": order.refund_advance,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product=product_ref_from_raw(i["product"]),
                quantity=int(i["quantity"]),
                original_unit_price=money_from_raw(i["original_price"]),
                current_unit_price=money_from_raw(i["current_price"]),
                list_unit_price=optional_money_from_raw(i.get("list_price")),
            )
            for i in raw["items"]
        ]
        payment_status = PaymentStatus(raw.get("payment_status", "paid"))
        total = money_from_raw(raw["total"])
        # Orders stored before advance billing only ever owed their total while pending.
        unpaid = raw["total"] if payment_status is PaymentStatus.PENDING else "0"
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw.get("customer_id"),
            items=items,
            subtotal=money_from_raw(raw["subtotal"]),
            discount=money_from_raw(raw.get("discount", "0")),
            discount_percentage=Decimal(raw.get("discount_percentage", "0")),
            after_discount=money_from_raw(raw.get("after_discount", raw["total"])),
            total=total,
            payment_method=raw.get("payment_method") or "Cash",
            status=OrderStatus(raw["status"]),
            payment_status=payment_status,
            created_at=dt_from_raw(raw["created_at"]),
            cancelled_at=dt_from_raw(raw.get("cancelled_at")),
            cancel_reason=raw.get("cancel_reason") or "",
            advance_amount=money_from_raw(raw.get("advance_amount", "0")),
            remaining_amount=money_from_raw(raw.get("remaining_amount", unpaid)),
            paid_at=dt_from_raw(raw.get("paid_at")),
            final_payment_method=raw.get("final_payment_method") or "",
            refund_advance=bool(raw.get("refund_advance", False)),
        )
