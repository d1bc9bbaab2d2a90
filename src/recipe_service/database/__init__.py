"""Entity store: protocol, backends and factory."""

from recipe_service.database.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    StoreConnectionError,
    StoreError,
)
from recipe_service.database.factory import create_entity_store
from recipe_service.database.memory import InMemoryEntityStore
from recipe_service.database.postgres import PostgresEntityStore
from recipe_service.database.store import (
    ASCENDING,
    COOKBOOKS,
    DESCENDING,
    RECIPES,
    REVIEWS,
    USERS,
    Document,
    EntityStore,
    Filter,
    Sort,
    in_,
)


__all__ = [
    "ASCENDING",
    "COOKBOOKS",
    "DESCENDING",
    "RECIPES",
    "REVIEWS",
    "USERS",
    "Document",
    "DocumentNotFoundError",
    "DuplicateDocumentError",
    "EntityStore",
    "Filter",
    "InMemoryEntityStore",
    "PostgresEntityStore",
    "Sort",
    "StoreConnectionError",
    "StoreError",
    "create_entity_store",
    "in_",
]
