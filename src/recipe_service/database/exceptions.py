"""Entity store exceptions.

Backends translate driver-specific failures into these so the service layer
never imports asyncpg.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for entity store failures."""


class DocumentNotFoundError(StoreError):
    """Raised when an update or delete targets a missing document."""

    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"{collection}/{document_id} not found")


class DuplicateDocumentError(StoreError):
    """Raised when a write violates a unique index."""

    def __init__(self, collection: str, fields: tuple[str, ...]) -> None:
        self.collection = collection
        self.fields = fields
        super().__init__(f"duplicate {collection} on ({', '.join(fields)})")


class StoreConnectionError(StoreError):
    """Raised when the backing database cannot be reached."""
