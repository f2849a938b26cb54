"""Document store contract and client-side query evaluation.

The store holds schemaless documents grouped in named collections.  Every
document belongs to one owner (the signed-in user's uid) and every call
takes that owner explicitly; a store never returns another owner's data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

OWNER_FIELD = "owner_id"

EQUALITY_OPERATORS = frozenset({"==", "!=", "in", "array-contains"})
RANGE_OPERATORS = frozenset({"<", "<=", ">", ">="})


def to_storage(value: Any) -> Any:
    """Normalize a query value to the form documents are stored in."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        return value.astimezone(timezone.utc).isoformat()
    return value


def field_value(doc: dict, path: str) -> Any:
    """Read a dotted path such as ``product.id`` from a document."""
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


@dataclass(frozen=True)
class Condition:
    field: str
    operator: str
    value: Any

    def __post_init__(self) -> None:
        if self.operator not in EQUALITY_OPERATORS | RANGE_OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator!r}")

    @property
    def is_range(self) -> bool:
        return self.operator in RANGE_OPERATORS

    def matches(self, doc: dict) -> bool:
        actual = field_value(doc, self.field)
        target = to_storage(self.value)
        if self.operator == "==":
            return actual == target
        if self.operator == "!=":
            return actual != target
        if self.operator == "in":
            return actual in [to_storage(v) for v in target]
        if self.operator == "array-contains":
            return isinstance(actual, list) and target in actual
        if actual is None:
            return False
        try:
            if self.operator == "<":
                return actual < target
            if self.operator == "<=":
                return actual <= target
            if self.operator == ">":
                return actual > target
            return actual >= target
        except TypeError:
            return False


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = True


def needs_composite_index(
    where: Sequence[Condition], order_by: OrderBy | None
) -> bool:
    """True when a query ranges over more than one field.

    Ordering by a field other than the one being ranged over counts too.
    """
    range_fields = {c.field for c in where if c.is_range}
    if len(range_fields) > 1:
        return True
    if range_fields and order_by is not None and order_by.field not in range_fields:
        return True
    return False


def apply_query(
    docs: Iterable[dict],
    where: Sequence[Condition] = (),
    order_by: OrderBy | None = None,
    limit: int | None = None,
) -> list[dict]:
    """Filter, sort and truncate documents in memory."""
    result = [doc for doc in docs if all(c.matches(doc) for c in where)]
    if order_by is not None:
        present = [d for d in result if field_value(d, order_by.field) is not None]
        missing = [d for d in result if field_value(d, order_by.field) is None]
        present.sort(key=lambda d: field_value(d, order_by.field), reverse=order_by.descending)
        result = present + missing
    if limit is not None:
        result = result[:limit]
    return result


class DocumentStore(ABC):

    @abstractmethod
    def create(self, owner_id: str, collection: str, data: dict) -> dict:
        """Insert a document and return it with its generated ``id``."""

    @abstractmethod
    def update(self, owner_id: str, collection: str, doc_id: str, patch: dict) -> dict:
        """Merge ``patch`` into a document and return the result."""

    @abstractmethod
    def delete(self, owner_id: str, collection: str, doc_id: str) -> str:
        """Remove a document and return its id."""

    @abstractmethod
    def get_by_id(self, owner_id: str, collection: str, doc_id: str) -> dict:
        """Return one document; raises EntityNotFoundError if absent."""

    @abstractmethod
    def get_all(
        self,
        owner_id: str,
        collection: str,
        where: Sequence[Condition] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Return the owner's documents matching every condition.

        May raise IndexRequiredError for queries the backend cannot serve.
        """
