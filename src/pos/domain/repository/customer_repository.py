"""Abstract repository for Customer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer, newest first."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer; assigns ``id`` to new ones."""

    @abstractmethod
    def delete(self, customer_id: str) -> None:
        """Remove a customer; raises EntityNotFoundError if absent."""
