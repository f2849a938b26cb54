"""DocumentStore-backed implementation of ExpenseRepository."""

from __future__ import annotations

from datetime import datetime

from pos.domain.model.expense import Expense
from pos.domain.repository.expense_repository import ExpenseRepository
from pos.infrastructure.persistence.codec import (
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)
from pos.infrastructure.persistence.document_repository import DocumentRepository
from pos.infrastructure.persistence.document_store import Condition, OrderBy


class DocumentExpenseRepository(DocumentRepository, ExpenseRepository):

    collection = "expenses"

    def get_by_id(self, expense_id: str) -> Expense | None:
        raw = self._get(expense_id)
        return None if raw is None else self._to_domain(raw)

    def list(
        self,
        category: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Expense]:
        where: list[Condition] = []
        if category:
            where.append(Condition("category", "==", category))
        if start is not None:
            where.append(Condition("date", ">=", start))
        if end is not None:
            where.append(Condition("date", "<=", end))
        return [self._to_domain(raw) for raw in self._query(where, OrderBy("date"))]

    def save(self, expense: Expense) -> None:
        expense.id = self._write(expense.id, self._to_raw(expense))

    def delete(self, expense_id: str) -> None:
        self._remove(expense_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(expense: Expense) -> dict:
        return {
            "title": expense.title,
            "amount": money_to_raw(expense.amount),
            "category": expense.category,
            "date": dt_to_raw(expense.date),
            "payment_method": expense.payment_method,
            "description": expense.description,
            "receipt_number": expense.receipt_number,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Expense:
        return Expense(
            id=raw["id"],
            title=raw["title"],
            amount=money_from_raw(raw["amount"]),
            category=raw["category"],
            date=dt_from_raw(raw["date"]),
            payment_method=raw.get("payment_method") or "Cash",
            description=raw.get("description") or "",
            receipt_number=raw.get("receipt_number") or "",
        )
