"""Application services: order queries."""

from __future__ import annotations

from datetime import datetime

from pos.application.dto import OrderDTO, to_order_dto
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.order import Order, OrderStatus
from pos.domain.repository.customer_repository import CustomerRepository
from pos.domain.repository.order_repository import OrderRepository


def find_order(order_repo: OrderRepository, ref: str) -> Order:
    """Look an order up by id, falling back to its order number."""
    order = order_repo.get_by_id(ref) or order_repo.get_by_number(ref)
    if order is None:
        raise EntityNotFoundError(f"Order '{ref}' not found")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_ref: str) -> OrderDTO:
        return to_order_dto(find_order(self._order_repo, order_ref))


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(
        self,
        status: str | None = None,
        customer_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        search: str | None = None,
        limit: int = 100,
    ) -> list[OrderDTO]:
        """List orders, newest first.

        ``search`` matches the order number or the customer's name or phone.
        """
        orders = self._order_repo.list(
            status=parse_status(status),
            customer_id=customer_id,
            start=start,
            end=end,
            limit=None if search else limit,
        )
        if search:
            orders = [o for o in orders if self._matches(o, search.strip().lower())][:limit]
        return [to_order_dto(order) for order in orders]

    def _matches(self, order: Order, term: str) -> bool:
        if term in order.order_number.lower():
            return True
        if not order.customer_id:
            return False
        customer = self._customer_repo.get_by_id(order.customer_id)
        return customer is not None and (term in customer.name.lower() or term in customer.phone)


def parse_status(raw: str | None) -> OrderStatus | None:
    if not raw:
        return None
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown order status '{raw}'") from exc
