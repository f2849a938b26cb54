"""Abstract repository for Expense records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from pos.domain.model.expense import Expense


class ExpenseRepository(ABC):

    @abstractmethod
    def get_by_id(self, expense_id: str) -> Expense | None:
        """Return an expense by ID, or None if not found."""

    @abstractmethod
    def list(
        self,
        category: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Expense]:
        """Return matching expenses, most recent date first."""

    @abstractmethod
    def save(self, expense: Expense) -> None:
        """Persist a new or updated expense; assigns ``id`` to new ones."""

    @abstractmethod
    def delete(self, expense_id: str) -> None:
        """Remove an expense; raises EntityNotFoundError if absent."""
