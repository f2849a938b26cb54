"""JSON-file-backed implementation of DocumentStore.

Each collection is one JSON array on disk.  Writes go through a temp file
and ``os.replace`` so a crash never leaves half a file behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from pos.domain.exceptions import EntityNotFoundError, IndexRequiredError, StoreError
from pos.infrastructure.persistence.document_store import (
    OWNER_FIELD,
    Condition,
    DocumentStore,
    OrderBy,
    apply_query,
    needs_composite_index,
)

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonDocumentStore(DocumentStore):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- DocumentStore interface ----------------------------------------------

    def create(self, owner_id: str, collection: str, data: dict) -> dict:
        docs = self._load_raw(collection)
        doc = dict(data)
        doc["id"] = uuid.uuid4().hex
        doc[OWNER_FIELD] = owner_id
        doc.setdefault("created_at", _now_iso())
        docs.append(doc)
        self._persist_raw(collection, docs)
        logger.debug("Created %s/%s", collection, doc["id"])
        return dict(doc)

    def update(self, owner_id: str, collection: str, doc_id: str, patch: dict) -> dict:
        docs = self._load_raw(collection)
        index = self._locate(docs, owner_id, collection, doc_id)
        updated = {**docs[index], **patch}
        updated["id"] = doc_id
        updated[OWNER_FIELD] = owner_id
        updated["updated_at"] = _now_iso()
        docs[index] = updated
        self._persist_raw(collection, docs)
        logger.debug("Updated %s/%s", collection, doc_id)
        return dict(updated)

    def delete(self, owner_id: str, collection: str, doc_id: str) -> str:
        docs = self._load_raw(collection)
        index = self._locate(docs, owner_id, collection, doc_id)
        del docs[index]
        self._persist_raw(collection, docs)
        logger.debug("Deleted %s/%s", collection, doc_id)
        return doc_id

    def get_by_id(self, owner_id: str, collection: str, doc_id: str) -> dict:
        docs = self._load_raw(collection)
        return dict(docs[self._locate(docs, owner_id, collection, doc_id)])

    def get_all(
        self,
        owner_id: str,
        collection: str,
        where: Sequence[Condition] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        if needs_composite_index(where, order_by):
            raise IndexRequiredError(
                f"Query on '{collection}' needs a composite index "
                f"({', '.join(f'{c.field} {c.operator}' for c in where)})"
            )
        owned = [d for d in self._load_raw(collection) if d.get(OWNER_FIELD) == owner_id]
        return [dict(d) for d in apply_query(owned, where, order_by, limit)]

    # --- File helpers ---------------------------------------------------------

    def _locate(self, docs: list[dict], owner_id: str, collection: str, doc_id: str) -> int:
        for i, doc in enumerate(docs):
            if doc.get("id") == doc_id and doc.get(OWNER_FIELD) == owner_id:
                return i
        raise EntityNotFoundError(f"Document '{doc_id}' not found in {collection}")

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _load_raw(self, collection: str) -> list[dict]:
        path = self._path(collection)
        if not path.exists():
            return []
        try:
            docs = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreError(f"Error reading {collection}: {exc}") from exc
        if not isinstance(docs, list) or not all(isinstance(d, dict) for d in docs):
            raise StoreError(f"Error reading {collection}: expected a list of documents")
        return docs

    def _persist_raw(self, collection: str, docs: list[dict]) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{collection}_", suffix=".tmp"
            )
        except OSError as exc:
            raise StoreError(f"Error writing {collection}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(docs, f, indent=2)
                f.write("\n")
            os.replace(temp_path, self._path(collection))
        except OSError as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StoreError(f"Error writing {collection}: {exc}") from exc
