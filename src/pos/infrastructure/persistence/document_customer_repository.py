"""DocumentStore-backed implementation of CustomerRepository."""

from __future__ import annotations

from pos.domain.model.customer import Customer
from pos.domain.repository.customer_repository import CustomerRepository
from pos.infrastructure.persistence.codec import (
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)
from pos.infrastructure.persistence.document_repository import DocumentRepository
from pos.infrastructure.persistence.document_store import OrderBy


class DocumentCustomerRepository(DocumentRepository, CustomerRepository):

    collection = "customers"

    def get_by_id(self, customer_id: str) -> Customer | None:
        raw = self._get(customer_id)
        return None if raw is None else self._to_domain(raw)

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._query(order_by=OrderBy("created_at"))]

    def save(self, customer: Customer) -> None:
        customer.id = self._write(customer.id, self._to_raw(customer))

    def delete(self, customer_id: str) -> None:
        self._remove(customer_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "name": customer.name,
            "phone": customer.phone,
            "email": customer.email,
            "address": customer.address,
            "total_purchases": customer.total_purchases,
            "total_spent": money_to_raw(customer.total_spent),
            "last_purchase": dt_to_raw(customer.last_purchase),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            phone=raw["phone"],
            email=raw.get("email") or "",
            address=raw.get("address") or "",
            total_purchases=int(raw.get("total_purchases", 0)),
            total_spent=money_from_raw(raw.get("total_spent", "0")),
            last_purchase=dt_from_raw(raw.get("last_purchase")),
        )
