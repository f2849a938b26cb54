"""Shared plumbing for repositories that sit on a DocumentStore."""

from __future__ import annotations

import logging
from typing import Sequence

from pos.domain.exceptions import EntityNotFoundError, IndexRequiredError
from pos.infrastructure.persistence.document_store import (
    Condition,
    DocumentStore,
    OrderBy,
    apply_query,
)

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Base class binding one collection of one owner's documents."""

    collection: str = ""

    def __init__(self, store: DocumentStore, owner_id: str) -> None:
        self._store = store
        self._owner_id = owner_id

    def _get(self, doc_id: str) -> dict | None:
        try:
            return self._store.get_by_id(self._owner_id, self.collection, doc_id)
        except EntityNotFoundError:
            return None

    def _query(
        self,
        where: Sequence[Condition] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Run a query, filtering client-side when the store lacks an index."""
        try:
            return self._store.get_all(
                self._owner_id, self.collection, where, order_by, limit
            )
        except IndexRequiredError as exc:
            logger.warning("%s; filtering %s client-side", exc, self.collection)
            everything = self._store.get_all(self._owner_id, self.collection)
            return apply_query(everything, where, order_by, limit)

    def _write(self, doc_id: str | None, raw: dict) -> str:
        """Create or update; returns the document id."""
        if doc_id is None:
            return self._store.create(self._owner_id, self.collection, raw)["id"]
        self._store.update(self._owner_id, self.collection, doc_id, raw)
        return doc_id

    def _remove(self, doc_id: str) -> None:
        self._store.delete(self._owner_id, self.collection, doc_id)
