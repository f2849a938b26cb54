"""Domain service: lifetime purchase statistics per customer."""

from __future__ import annotations

from datetime import datetime, timezone

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.customer import Customer
from pos.domain.model.value_objects import Money
from pos.domain.repository.customer_repository import CustomerRepository


class CustomerStatsService:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def bump(
        self,
        customer_id: str,
        order_total: Money,
        when: datetime | None = None,
    ) -> Customer:
        """Count one more purchase of ``order_total`` for the customer.

        Cancelling an order does not undo this: the counters record
        checkout activity, not current balances.
        """
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")

        customer.record_purchase(order_total, when or datetime.now(timezone.utc))
        self._customer_repo.save(customer)
        return customer
