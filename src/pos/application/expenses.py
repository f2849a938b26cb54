"""Application services: shop expenses."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.expense import Expense
from pos.domain.model.value_objects import Money
from pos.domain.repository.expense_repository import ExpenseRepository
from pos.domain.service.reporting import ReportWindow

EXPENSE_DATE_FORMAT = "%Y-%m-%d"


def default_receipt_number() -> str:
    return f"EXP-{time.time_ns() // 1_000_000}"


@dataclass(frozen=True)
class ExpenseDTO:
    id: str
    title: str
    amount: str
    category: str
    date: str
    payment_method: str
    description: str
    receipt_number: str


def to_expense_dto(expense: Expense) -> ExpenseDTO:
    return ExpenseDTO(
        id=expense.id or "",
        title=expense.title,
        amount=str(expense.amount),
        category=expense.category,
        date=expense.date.astimezone().strftime(EXPENSE_DATE_FORMAT),
        payment_method=expense.payment_method,
        description=expense.description,
        receipt_number=expense.receipt_number,
    )


class AddExpenseHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(
        self,
        title: str,
        amount: str,
        category: str,
        date: datetime | None = None,
        payment_method: str = "Cash",
        description: str = "",
        receipt_number: str | None = None,
    ) -> ExpenseDTO:
        expense = Expense(
            id=None,
            title=title.strip(),
            amount=Money.of(amount),
            category=category.strip(),
            date=date or datetime.now(timezone.utc),
            payment_method=payment_method.strip() or "Cash",
            description=description.strip(),
            receipt_number=(receipt_number or "").strip() or default_receipt_number(),
        )
        self._expense_repo.save(expense)
        return to_expense_dto(expense)


class UpdateExpenseHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(
        self,
        expense_id: str,
        title: str | None = None,
        amount: str | None = None,
        category: str | None = None,
        date: datetime | None = None,
        payment_method: str | None = None,
        description: str | None = None,
    ) -> ExpenseDTO:
        """Change the given fields; ``None`` leaves a field as it is."""
        expense = self._expense_repo.get_by_id(expense_id)
        if expense is None:
            raise EntityNotFoundError(f"Expense with ID '{expense_id}' not found")

        changes: dict = {}
        if title is not None:
            changes["title"] = title.strip()
        if amount is not None:
            changes["amount"] = Money.of(amount)
        if category is not None:
            changes["category"] = category.strip()
        if date is not None:
            changes["date"] = date
        if payment_method is not None:
            changes["payment_method"] = payment_method.strip() or "Cash"
        if description is not None:
            changes["description"] = description.strip()

        # replace() re-runs the entity's validation on the merged fields.
        updated = replace(expense, **changes)
        self._expense_repo.save(updated)
        return to_expense_dto(updated)


class DeleteExpenseHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(self, expense_id: str) -> None:
        self._expense_repo.delete(expense_id)


class ListExpensesHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(
        self, category: str | None = None, window: ReportWindow | None = None
    ) -> list[ExpenseDTO]:
        expenses = self._expense_repo.list(
            category=category,
            start=window.start_at if window else None,
            end=window.end_at if window else None,
        )
        return [to_expense_dto(e) for e in expenses]
