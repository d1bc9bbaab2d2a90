"""Shared test fixtures for the Recipe Box service tests.

Provides an in-memory entity store plus helpers that seed users, recipes,
cookbooks and reviews directly through the store.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import pytest

from recipe_service.database.memory import InMemoryEntityStore
from recipe_service.database.store import COOKBOOKS, RECIPES, REVIEWS, USERS
from recipe_service.domain.models import Cookbook, Recipe, Review, User


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


# YAML overrides are picked by APP_ENV at Settings() construction time.
os.environ.setdefault("APP_ENV", "test")


def recipe_document(creator_id: str, **overrides: Any) -> dict[str, Any]:
    """A valid camelCase recipe document owned by ``creator_id``."""
    return {
        "creatorId": creator_id,
        "title": "Tomato Soup",
        "description": "Weeknight soup",
        "ingredients": [{"name": "tomato", "quantity": "4"}],
        "instructions": ["Chop", "Simmer"],
        "servings": 2,
        "isPublic": True,
        "tags": ["soup"],
    } | overrides


@pytest.fixture
def store() -> InMemoryEntityStore:
    """Create a fresh in-memory entity store."""
    return InMemoryEntityStore()


@pytest.fixture
def make_user(store: InMemoryEntityStore) -> Callable[..., Awaitable[User]]:
    """Factory fixture that stores a user and returns it."""

    async def _make(display_name: str = "Ada Lovelace", **overrides: Any) -> User:
        doc = await store.create(
            USERS,
            {"displayName": display_name, "email": None} | overrides,
        )
        return User.model_validate(doc)

    return _make


@pytest.fixture
def make_recipe(store: InMemoryEntityStore) -> Callable[..., Awaitable[Recipe]]:
    """Factory fixture that stores a recipe and returns it."""

    async def _make(creator_id: str, **overrides: Any) -> Recipe:
        doc = await store.create(RECIPES, recipe_document(creator_id, **overrides))
        return Recipe.model_validate(doc)

    return _make


@pytest.fixture
def make_cookbook(store: InMemoryEntityStore) -> Callable[..., Awaitable[Cookbook]]:
    """Factory fixture that stores a cookbook and returns it."""

    async def _make(
        owner_id: str,
        recipe_ids: list[str] | None = None,
        **overrides: Any,
    ) -> Cookbook:
        doc = await store.create(
            COOKBOOKS,
            {
                "ownerId": owner_id,
                "name": "Favourites",
                "description": "",
                "recipeIds": recipe_ids or [],
            }
            | overrides,
        )
        return Cookbook.model_validate(doc)

    return _make


@pytest.fixture
def make_review(store: InMemoryEntityStore) -> Callable[..., Awaitable[Review]]:
    """Factory fixture that stores a review and returns it."""

    async def _make(
        reviewer_id: str,
        recipe_id: str,
        rating: int = 5,
        comment: str = "Lovely",
    ) -> Review:
        doc = await store.create(
            REVIEWS,
            {
                "reviewerId": reviewer_id,
                "recipeId": recipe_id,
                "rating": rating,
                "comment": comment,
            },
        )
        return Review.model_validate(doc)

    return _make
