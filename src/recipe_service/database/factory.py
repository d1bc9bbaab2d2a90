"""Entity store factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.core.config import StoreBackend
from recipe_service.database.memory import InMemoryEntityStore
from recipe_service.database.postgres import PostgresEntityStore
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.core.config import Settings
    from recipe_service.database.store import EntityStore

logger = get_logger(__name__)


def create_entity_store(settings: Settings) -> EntityStore:
    """Create the entity store selected by ``database.backend``.

    The store is returned uninitialized; the application lifespan calls
    ``initialize()`` on startup and ``shutdown()`` on exit.
    """
    backend = settings.store_backend_enum
    logger.info("Creating entity store", backend=backend.value)

    if backend == StoreBackend.MEMORY:
        if settings.is_production:
            logger.warning("In-memory entity store selected in production")
        return InMemoryEntityStore()

    return PostgresEntityStore(
        settings.database_url,
        schema=settings.database.db_schema,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl,
    )
