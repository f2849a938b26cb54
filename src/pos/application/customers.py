"""Application services: customer records.

Purchase statistics are owned by checkout; these handlers only ever
touch contact details.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.application.dto import format_date
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.customer import Customer
from pos.domain.repository.customer_repository import CustomerRepository


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    phone: str
    email: str
    address: str
    total_purchases: int
    total_spent: str
    last_purchase: str


def to_customer_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id or "",
        name=customer.name,
        phone=customer.phone,
        email=customer.email,
        address=customer.address,
        total_purchases=customer.total_purchases,
        total_spent=str(customer.total_spent),
        last_purchase=(
            format_date(customer.last_purchase) if customer.last_purchase else ""
        ),
    )


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, name: str, phone: str, email: str = "", address: str = "") -> CustomerDTO:
        customer = Customer(
            id=None,
            name=name.strip(),
            phone=phone.strip(),
            email=email.strip(),
            address=address.strip(),
        )
        self._customer_repo.save(customer)
        return to_customer_dto(customer)


class UpdateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str,
        name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
    ) -> CustomerDTO:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")

        if name is not None:
            if not name.strip():
                raise ValidationError("Customer name is required")
            customer.name = name.strip()
        if phone is not None:
            if not phone.strip():
                raise ValidationError("Customer phone is required")
            customer.phone = phone.strip()
        if email is not None:
            customer.email = email.strip()
        if address is not None:
            customer.address = address.strip()

        self._customer_repo.save(customer)
        return to_customer_dto(customer)


class DeleteCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, customer_id: str) -> None:
        self._customer_repo.delete(customer_id)


class ListCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, search: str | None = None) -> list[CustomerDTO]:
        customers = self._customer_repo.list_all()
        if search and search.strip():
            customers = [c for c in customers if c.matches(search.strip())]
        return [to_customer_dto(c) for c in customers]
