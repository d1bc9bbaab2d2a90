"""FastAPI dependencies for service access.

Resources are created during application startup and kept on app.state;
services are cheap wrappers built per request around the shared store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from recipe_service.core.config import Settings  # noqa: TC001
from recipe_service.core.exceptions import ServiceUnavailableError
from recipe_service.database.store import EntityStore  # noqa: TC001
from recipe_service.services.cookbooks import CookbookService
from recipe_service.services.recipes import RecipeService
from recipe_service.services.reviews import ReviewService
from recipe_service.services.users import UserService


if TYPE_CHECKING:
    from recipe_service.auth.oauth import GoogleOAuthClient


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_entity_store(request: Request) -> EntityStore:
    """Get the entity store from app state.

    Raises:
        ServiceUnavailableError: 503 if the store is not initialized.
    """
    store: EntityStore | None = getattr(request.app.state, "entity_store", None)
    if store is None:
        raise ServiceUnavailableError("Entity store not available")
    return store


def get_oauth_client(request: Request) -> GoogleOAuthClient:
    """Get the Google OAuth client from app state.

    Raises:
        ServiceUnavailableError: 503 if Google login is not configured.
    """
    client: GoogleOAuthClient | None = getattr(request.app.state, "oauth_client", None)
    if client is None:
        raise ServiceUnavailableError("Google login is not configured")
    return client


StoreDep = Annotated[EntityStore, Depends(get_entity_store)]


def get_recipe_service(store: StoreDep) -> RecipeService:
    return RecipeService(store)


def get_cookbook_service(
    store: StoreDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CookbookService:
    return CookbookService(store, public_read=settings.features.public_cookbook_read)


def get_review_service(store: StoreDep) -> ReviewService:
    return ReviewService(store)


def get_user_service(store: StoreDep) -> UserService:
    return UserService(store)
