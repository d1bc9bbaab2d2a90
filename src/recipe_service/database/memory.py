"""In-memory entity store.

Dict-backed backend for local development and tests. Each collection is an
insertion-ordered dict keyed by document id, so stable sorts keep insertion
order for ties. Documents are deep-copied on the way in and out; callers
never hold references into the store.
"""

from __future__ import annotations

import copy
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from recipe_service.database.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
)
from recipe_service.database.store import (
    COLLECTIONS,
    UNIQUE_KEYS,
    check_collection,
    strip_reserved,
)
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from recipe_service.database.store import Document, Filter, Sort

logger = get_logger(__name__)

_MISSING = object()


def matches(document: Mapping[str, Any], filter_: Filter | None) -> bool:
    """Return True when ``document`` satisfies every clause of ``filter_``."""
    if not filter_:
        return True
    for field, expected in filter_.items():
        actual = document.get(field, _MISSING)
        if isinstance(expected, dict) and "$in" in expected:
            if actual is _MISSING or actual not in expected["$in"]:
                return False
        elif actual != expected:
            return False
    return True


def _sort_key_part(value: Any) -> tuple[bool, Any]:
    # None sorts before any real value.
    return (value is not None, value)


class InMemoryEntityStore:
    """EntityStore implementation backed by process memory."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {
            name: {} for name in COLLECTIONS
        }
        self._last_timestamp: datetime | None = None

    @property
    def backend_name(self) -> str:
        return "memory"

    async def initialize(self) -> None:
        logger.info("In-memory entity store initialized")

    async def shutdown(self) -> None:
        logger.debug("In-memory entity store shutdown")

    async def health(self) -> dict[str, str]:
        return {"database": "healthy"}

    def _now(self) -> datetime:
        """Current UTC time, strictly increasing across calls."""
        now = datetime.now(UTC)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _table(self, collection: str) -> dict[str, Document]:
        return self._collections[check_collection(collection)]

    def _check_unique(
        self,
        collection: str,
        candidate: Mapping[str, Any],
        exclude_id: str | None = None,
    ) -> None:
        fields = UNIQUE_KEYS.get(collection)
        if not fields:
            return
        key = tuple(candidate.get(f) for f in fields)
        if any(part is None for part in key):
            return
        for doc_id, existing in self._table(collection).items():
            if doc_id == exclude_id:
                continue
            if tuple(existing.get(f) for f in fields) == key:
                raise DuplicateDocumentError(collection, fields)

    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        table = self._table(collection)
        now = self._now()
        stored: Document = {
            **copy.deepcopy(strip_reserved(document)),
            "id": str(uuid.uuid4()),
            "createdAt": now,
            "updatedAt": now,
        }
        self._check_unique(collection, stored)
        table[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def find_by_id(self, collection: str, document_id: str) -> Document | None:
        found = self._table(collection).get(document_id)
        return copy.deepcopy(found) if found is not None else None

    async def find(
        self,
        collection: str,
        filter_: Filter | None = None,
        sort: Sort = (),
    ) -> list[Document]:
        results = [
            doc for doc in self._table(collection).values() if matches(doc, filter_)
        ]
        # Apply keys last-to-first; list.sort is stable, also with reverse=True.
        for field, direction in reversed(sort):
            results.sort(
                key=lambda doc, f=field: _sort_key_part(doc.get(f)),
                reverse=direction < 0,
            )
        return copy.deepcopy(results)

    async def update_by_id(
        self,
        collection: str,
        document_id: str,
        partial: Mapping[str, Any],
    ) -> Document:
        table = self._table(collection)
        existing = table.get(document_id)
        if existing is None:
            raise DocumentNotFoundError(collection, document_id)

        merged = {**existing, **copy.deepcopy(strip_reserved(partial))}
        self._check_unique(collection, merged, exclude_id=document_id)
        merged["updatedAt"] = self._now()
        table[document_id] = merged
        return copy.deepcopy(merged)

    async def delete_by_id(self, collection: str, document_id: str) -> Document:
        removed = self._table(collection).pop(document_id, None)
        if removed is None:
            raise DocumentNotFoundError(collection, document_id)
        return copy.deepcopy(removed)

    async def delete_many(self, collection: str, filter_: Filter) -> int:
        table = self._table(collection)
        doomed = [doc_id for doc_id, doc in table.items() if matches(doc, filter_)]
        for doc_id in doomed:
            del table[doc_id]
        return len(doomed)
