"""Recipe lifecycle: create, read, list, update and cascade delete."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.core.exceptions import NotFoundError
from recipe_service.database.store import RECIPES, REVIEWS
from recipe_service.domain.models import Recipe, to_document
from recipe_service.observability.logging import get_logger
from recipe_service.services.access import queries
from recipe_service.services.access.policy import (
    Action,
    enforce,
    recipe_decision,
    require_requester,
)
from recipe_service.services.base import (
    changed_fields,
    store_operation,
    validate_document,
)
from recipe_service.services.populate import populate_recipe, populate_recipes


if TYPE_CHECKING:
    from recipe_service.database.store import EntityStore
    from recipe_service.schemas.recipe import RecipeCreate, RecipeUpdate, RecipeView
    from recipe_service.services.access.queries import Query

logger = get_logger(__name__)


class RecipeService:
    """Recipe operations on behalf of a requester.

    ``requester_id`` is the authenticated user's id, or ``None`` for an
    anonymous caller. Every decision is made against the document loaded
    within the same call.
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def load(self, recipe_id: str) -> Recipe:
        """Load a recipe or raise NotFoundError."""
        doc = await self._store.find_by_id(RECIPES, recipe_id)
        if doc is None:
            raise NotFoundError("Recipe", recipe_id)
        return Recipe.model_validate(doc)

    async def _list(self, query: Query) -> list[RecipeView]:
        docs = await self._store.find(RECIPES, query.filter, query.sort)
        return await populate_recipes(
            self._store, [Recipe.model_validate(d) for d in docs]
        )

    @store_operation("Recipe", "Failed to retrieve recipes")
    async def list_public(self) -> list[RecipeView]:
        """All public recipes, newest first."""
        return await self._list(queries.public_recipes())

    @store_operation("Recipe", "Failed to retrieve recipes")
    async def list_owned(self, requester_id: str | None) -> list[RecipeView]:
        """The requester's own recipes, private ones included."""
        owner_id = require_requester(requester_id)
        return await self._list(queries.owned_recipes(owner_id))

    @store_operation("Recipe", "Failed to retrieve recipes")
    async def list_public_by_creator(self, user_id: str) -> list[RecipeView]:
        return await self._list(queries.public_recipes_by_creator(user_id))

    @store_operation("Recipe", "Failed to retrieve recipe")
    async def get(self, recipe_id: str, requester_id: str | None) -> RecipeView:
        recipe = await self.load(recipe_id)
        enforce(
            recipe_decision(Action.READ, recipe, requester_id),
            forbidden="Access denied. This recipe is private.",
        )
        return await populate_recipe(self._store, recipe)

    @store_operation("Recipe", "Failed to create recipe")
    async def create(
        self,
        payload: RecipeCreate,
        requester_id: str | None,
    ) -> RecipeView:
        creator_id = require_requester(requester_id)
        document = payload.model_dump(mode="json", by_alias=True)
        document["creatorId"] = creator_id

        stored = await self._store.create(RECIPES, document)
        recipe = Recipe.model_validate(stored)
        logger.info(
            "Recipe created",
            recipe_id=recipe.id,
            creator_id=creator_id,
            is_public=recipe.is_public,
        )
        return await populate_recipe(self._store, recipe)

    @store_operation("Recipe", "Failed to update recipe")
    async def update(
        self,
        recipe_id: str,
        payload: RecipeUpdate,
        requester_id: str | None,
    ) -> RecipeView:
        recipe = await self.load(recipe_id)
        enforce(
            recipe_decision(Action.UPDATE, recipe, requester_id),
            forbidden="Access denied. You can only update your own recipes.",
        )

        changes = changed_fields(payload)
        merged = validate_document(Recipe, to_document(recipe) | changes)
        stored = await self._store.update_by_id(
            RECIPES, recipe_id, to_document(merged)
        )
        logger.info("Recipe updated", recipe_id=recipe_id, fields=sorted(changes))
        return await populate_recipe(self._store, Recipe.model_validate(stored))

    @store_operation("Recipe", "Failed to delete recipe")
    async def delete(self, recipe_id: str, requester_id: str | None) -> int:
        """Delete a recipe and every review on it.

        Reviews go first, then the recipe, as two separate operations. If
        the second fails the reviews stay deleted.

        Returns:
            Number of reviews removed with the recipe.
        """
        recipe = await self.load(recipe_id)
        enforce(
            recipe_decision(Action.DELETE, recipe, requester_id),
            forbidden="Access denied. You can only delete your own recipes.",
        )

        review_query = queries.reviews_for_recipe(recipe_id)
        removed = await self._store.delete_many(REVIEWS, review_query.filter)
        await self._store.delete_by_id(RECIPES, recipe_id)
        logger.info(
            "Recipe deleted",
            recipe_id=recipe_id,
            deleted_reviews=removed,
        )
        return removed
