"""Review lifecycle and per-recipe rating aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_service.core.exceptions import ConflictError, NotFoundError
from recipe_service.database.exceptions import DuplicateDocumentError
from recipe_service.database.store import RECIPES, REVIEWS
from recipe_service.domain.models import Recipe, Review, to_document
from recipe_service.observability.logging import get_logger
from recipe_service.services.access import queries
from recipe_service.services.access.policy import (
    Action,
    enforce,
    require_requester,
    review_create_decision,
    review_decision,
    review_list_decision,
)
from recipe_service.services.base import (
    changed_fields,
    store_operation,
    validate_document,
)
from recipe_service.services.populate import populate_review, populate_reviews
from recipe_service.services.ratings import RatingSummary, aggregate_ratings


if TYPE_CHECKING:
    from recipe_service.database.store import EntityStore
    from recipe_service.schemas.review import ReviewCreate, ReviewUpdate, ReviewView

logger = get_logger(__name__)

DUPLICATE_REVIEW_MESSAGE = "You have already reviewed this recipe"


@dataclass(frozen=True, slots=True)
class RecipeReviews:
    """Reviews on one recipe plus their aggregate rating."""

    recipe_id: str
    reviews: list[ReviewView]
    summary: RatingSummary


class ReviewService:
    """Review operations on behalf of a requester."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def _load_recipe(self, recipe_id: str) -> Recipe | None:
        doc = await self._store.find_by_id(RECIPES, recipe_id)
        return Recipe.model_validate(doc) if doc is not None else None

    async def _require_recipe(self, recipe_id: str) -> Recipe:
        recipe = await self._load_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe

    async def _load(self, review_id: str) -> Review:
        doc = await self._store.find_by_id(REVIEWS, review_id)
        if doc is None:
            raise NotFoundError("Review", review_id)
        return Review.model_validate(doc)

    @store_operation("Review", "Failed to retrieve reviews")
    async def list_on_public_recipes(self) -> list[ReviewView]:
        """Every review whose recipe is public, newest first."""
        recipe_query = queries.public_recipes()
        recipes = {
            doc["id"]: Recipe.model_validate(doc)
            for doc in await self._store.find(RECIPES, recipe_query.filter)
        }
        if not recipes:
            return []

        query = queries.reviews_on_recipes(recipes)
        docs = await self._store.find(REVIEWS, query.filter, query.sort)
        return await populate_reviews(
            self._store,
            [Review.model_validate(d) for d in docs],
            recipes=recipes,
        )

    @store_operation("Review", "Failed to retrieve user reviews")
    async def list_authored(self, requester_id: str | None) -> list[ReviewView]:
        reviewer_id = require_requester(requester_id)
        query = queries.authored_reviews(reviewer_id)
        docs = await self._store.find(REVIEWS, query.filter, query.sort)
        return await populate_reviews(
            self._store, [Review.model_validate(d) for d in docs]
        )

    @store_operation("Review", "Failed to retrieve reviews")
    async def list_for_recipe(
        self,
        recipe_id: str,
        requester_id: str | None,
    ) -> RecipeReviews:
        recipe = await self._require_recipe(recipe_id)
        enforce(
            review_list_decision(recipe, requester_id),
            forbidden="Cannot view reviews for a private recipe",
        )

        query = queries.reviews_for_recipe(recipe_id)
        reviews = [
            Review.model_validate(d)
            for d in await self._store.find(REVIEWS, query.filter, query.sort)
        ]
        views = await populate_reviews(
            self._store, reviews, recipes={recipe.id: recipe}
        )
        return RecipeReviews(
            recipe_id=recipe_id,
            reviews=views,
            summary=aggregate_ratings(r.rating for r in reviews),
        )

    @store_operation("Review", "Failed to retrieve review")
    async def get(self, review_id: str, requester_id: str | None) -> ReviewView:
        review = await self._load(review_id)
        recipe = await self._load_recipe(review.recipe_id)
        enforce(
            review_decision(Action.READ, review, recipe, requester_id),
            forbidden="Access denied. Cannot view review for private recipe.",
        )
        return await populate_review(self._store, review)

    @store_operation("Review", "Failed to create review")
    async def create(
        self,
        recipe_id: str,
        payload: ReviewCreate,
        requester_id: str | None,
    ) -> ReviewView:
        """Create the requester's review of a public recipe.

        A second review by the same user on the same recipe is refused with
        409, whether caught by the lookup below or by the store's unique
        index when two requests race.
        """
        reviewer_id = require_requester(requester_id)
        recipe = await self._require_recipe(recipe_id)
        enforce(
            review_create_decision(recipe, reviewer_id),
            forbidden="Cannot review a private recipe",
        )

        existing = await self._store.find(
            REVIEWS, {"reviewerId": reviewer_id, "recipeId": recipe_id}
        )
        if existing:
            logger.info(
                "Review rejected: duplicate",
                recipe_id=recipe_id,
                reviewer_id=reviewer_id,
            )
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        document = payload.model_dump(mode="json", by_alias=True)
        document |= {"reviewerId": reviewer_id, "recipeId": recipe_id}
        try:
            stored = await self._store.create(REVIEWS, document)
        except DuplicateDocumentError as e:
            logger.info(
                "Review rejected: duplicate (unique index)",
                recipe_id=recipe_id,
                reviewer_id=reviewer_id,
            )
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE) from e

        review = Review.model_validate(stored)
        logger.info(
            "Review created",
            review_id=review.id,
            recipe_id=recipe_id,
            rating=review.rating,
        )
        return await populate_review(self._store, review)

    @store_operation("Review", "Failed to update review")
    async def update(
        self,
        review_id: str,
        payload: ReviewUpdate,
        requester_id: str | None,
    ) -> ReviewView:
        review = await self._load(review_id)
        enforce(
            review_decision(Action.UPDATE, review, None, requester_id),
            forbidden="Access denied. You can only update your own reviews.",
        )

        changes = changed_fields(payload)
        merged = validate_document(Review, to_document(review) | changes)
        stored = await self._store.update_by_id(
            REVIEWS, review_id, to_document(merged)
        )
        logger.info("Review updated", review_id=review_id, fields=sorted(changes))
        return await populate_review(self._store, Review.model_validate(stored))

    @store_operation("Review", "Failed to delete review")
    async def delete(self, review_id: str, requester_id: str | None) -> None:
        review = await self._load(review_id)
        enforce(
            review_decision(Action.DELETE, review, None, requester_id),
            forbidden="Access denied. You can only delete your own reviews.",
        )
        await self._store.delete_by_id(REVIEWS, review_id)
        logger.info("Review deleted", review_id=review_id)
