"""Customer aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Money


@dataclass
class Customer:
    """A customer record with lifetime purchase statistics.

    ``total_purchases`` and ``total_spent`` only ever grow: they count
    activity at checkout time and are never recalculated from history.
    """

    id: str | None
    name: str
    phone: str
    email: str = ""
    address: str = ""
    total_purchases: int = 0
    total_spent: Money = Money.zero()
    last_purchase: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Customer name is required")
        if not self.phone or not self.phone.strip():
            raise ValidationError("Customer phone is required")

    def record_purchase(self, order_total: Money, when: datetime) -> None:
        self.total_purchases += 1
        self.total_spent = self.total_spent + order_total
        self.last_purchase = when

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over name, phone and email."""
        term = term.lower()
        return (
            term in self.name.lower()
            or term in self.phone
            or term in self.email.lower()
        )
