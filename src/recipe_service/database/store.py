"""Entity store protocol.

Documents are plain dicts with camelCase keys. Every stored document carries
a server-assigned ``id`` (UUID string) and timezone-aware ``createdAt`` and
``updatedAt`` timestamps.

Filters are equality maps. A value may also be ``{"$in": [...]}`` to match
any of several values. Sorts are sequences of ``(field, direction)`` pairs
with direction ``1`` (ascending) or ``-1`` (descending); documents that tie
on every sort key keep insertion order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


Document = dict[str, Any]
Filter = dict[str, Any]
Sort = tuple[tuple[str, int], ...]

ASCENDING: Final[int] = 1
DESCENDING: Final[int] = -1

USERS: Final[str] = "users"
RECIPES: Final[str] = "recipes"
COOKBOOKS: Final[str] = "cookbooks"
REVIEWS: Final[str] = "reviews"
COLLECTIONS: Final[tuple[str, ...]] = (USERS, RECIPES, COOKBOOKS, REVIEWS)

# Field tuples that must be unique per collection. None values never collide.
UNIQUE_KEYS: Final[dict[str, tuple[str, ...]]] = {
    USERS: ("oauthId",),
    REVIEWS: ("reviewerId", "recipeId"),
}

# Keys owned by the store; client partials never overwrite them.
RESERVED_KEYS: Final[frozenset[str]] = frozenset({"id", "createdAt", "updatedAt"})


def in_(values: Sequence[Any]) -> dict[str, list[Any]]:
    """Build an ``$in`` filter value."""
    return {"$in": list(values)}


def check_collection(collection: str) -> str:
    """Return the collection name, rejecting unknown collections."""
    if collection not in COLLECTIONS:
        msg = f"Unknown collection: {collection}"
        raise ValueError(msg)
    return collection


def strip_reserved(partial: Mapping[str, Any]) -> Document:
    """Drop store-owned keys from a client-supplied document."""
    return {k: v for k, v in partial.items() if k not in RESERVED_KEYS}


@runtime_checkable
class EntityStore(Protocol):
    """Persistence for users, recipes, cookbooks and reviews."""

    @property
    def backend_name(self) -> str:
        """Short backend name for logging."""
        ...

    async def initialize(self) -> None:
        """Open connections and create schema objects."""
        ...

    async def shutdown(self) -> None:
        """Release connections."""
        ...

    async def health(self) -> dict[str, str]:
        """Return ``{"database": "healthy" | "unhealthy" | ...}``."""
        ...

    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        """Insert a document and return it with id and timestamps.

        Raises:
            DuplicateDocumentError: If a unique index would be violated.
        """
        ...

    async def find_by_id(self, collection: str, document_id: str) -> Document | None:
        """Return the document, or None when absent."""
        ...

    async def find(
        self,
        collection: str,
        filter_: Filter | None = None,
        sort: Sort = (),
    ) -> list[Document]:
        """Return every matching document in sort order."""
        ...

    async def update_by_id(
        self,
        collection: str,
        document_id: str,
        partial: Mapping[str, Any],
    ) -> Document:
        """Merge ``partial`` over the stored document and bump ``updatedAt``.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            DuplicateDocumentError: If a unique index would be violated.
        """
        ...

    async def delete_by_id(self, collection: str, document_id: str) -> Document:
        """Delete and return the document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...

    async def delete_many(self, collection: str, filter_: Filter) -> int:
        """Delete every matching document and return how many were removed."""
        ...
