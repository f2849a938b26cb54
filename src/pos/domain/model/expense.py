"""Expense entity: independent of sales, read by the reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Money


@dataclass
class Expense:

    id: str | None
    title: str
    amount: Money
    category: str
    date: datetime
    payment_method: str = "Cash"
    description: str = ""
    receipt_number: str = ""

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Expense title is required")
        if not self.category or not self.category.strip():
            raise ValidationError("Expense category is required")
        if self.amount.amount <= 0:
            raise ValidationError("Expense amount must be greater than zero")
