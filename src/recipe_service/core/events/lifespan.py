"""Application lifespan event handlers.

Startup configures logging, opens the entity store and prepares the auth
provider and Google OAuth client. Shutdown releases them in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_service.auth.oauth import GoogleOAuthClient
from recipe_service.auth.providers import create_auth_provider
from recipe_service.database import create_entity_store
from recipe_service.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_service.core.config import Settings

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # The store and auth provider are critical; startup fails without them.
    store = create_entity_store(settings)
    try:
        await store.initialize()
    except Exception:
        logger.exception("Failed to initialize entity store")
        raise
    app.state.entity_store = store

    try:
        provider = create_auth_provider(settings)
        await provider.initialize()
    except Exception:
        logger.exception("Failed to initialize auth provider")
        await store.shutdown()
        raise
    app.state.auth_provider = provider

    oauth_client = GoogleOAuthClient.from_settings(settings)
    if oauth_client is not None:
        await oauth_client.initialize()
    app.state.oauth_client = oauth_client

    logger.info(
        "Application startup complete",
        store=store.backend_name,
        auth_mode=provider.provider_name,
        google_login=oauth_client is not None,
    )


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    oauth_client = getattr(app.state, "oauth_client", None)
    if oauth_client is not None:
        await oauth_client.shutdown()

    provider = getattr(app.state, "auth_provider", None)
    if provider is not None:
        await provider.shutdown()

    store = getattr(app.state, "entity_store", None)
    if store is not None:
        await store.shutdown()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Settings are read from ``app.state.settings``, set by create_app().
    """
    settings: Settings = app.state.settings
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
