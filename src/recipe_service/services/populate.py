"""Explicit join step from stored documents to response views.

Related documents are fetched with one batched ``$in`` lookup per
collection per call, never one query per item. Stored documents are not
modified; references that no longer resolve become ``None`` (or are left
out of cookbook recipe lists).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.database.store import RECIPES, USERS, in_
from recipe_service.domain.models import Recipe, User
from recipe_service.schemas.common import UserSummary
from recipe_service.schemas.cookbook import CookbookRecipe, CookbookView
from recipe_service.schemas.recipe import RecipeView
from recipe_service.schemas.review import ReviewRecipe, ReviewView
from recipe_service.services.access.policy import Action, Decision, recipe_decision


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from recipe_service.database.store import EntityStore
    from recipe_service.domain.models import Cookbook, Review


def summarize_user(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        display_name=user.display_name,
        first_name=user.first_name,
        last_name=user.last_name,
    )


async def load_users(store: EntityStore, user_ids: Iterable[str]) -> dict[str, User]:
    """Fetch users by id in one query."""
    wanted = list(dict.fromkeys(user_ids))
    if not wanted:
        return {}
    docs = await store.find(USERS, {"id": in_(wanted)})
    return {doc["id"]: User.model_validate(doc) for doc in docs}


async def load_recipes(
    store: EntityStore,
    recipe_ids: Iterable[str],
) -> dict[str, Recipe]:
    """Fetch recipes by id in one query."""
    wanted = list(dict.fromkeys(recipe_ids))
    if not wanted:
        return {}
    docs = await store.find(RECIPES, {"id": in_(wanted)})
    return {doc["id"]: Recipe.model_validate(doc) for doc in docs}


def _recipe_view(recipe: Recipe, creator: User | None) -> RecipeView:
    return RecipeView(
        **recipe.model_dump(by_alias=False),
        creator=summarize_user(creator) if creator else None,
    )


async def populate_recipes(
    store: EntityStore,
    recipes: Sequence[Recipe],
) -> list[RecipeView]:
    users = await load_users(store, (r.creator_id for r in recipes))
    return [_recipe_view(r, users.get(r.creator_id)) for r in recipes]


async def populate_recipe(store: EntityStore, recipe: Recipe) -> RecipeView:
    (view,) = await populate_recipes(store, [recipe])
    return view


async def populate_cookbooks(
    store: EntityStore,
    cookbooks: Sequence[Cookbook],
    requester_id: str | None,
) -> list[CookbookView]:
    """Attach owners and the referenced recipes the requester may read.

    Recipe order follows each cookbook's ``recipe_ids``. Missing recipes and
    other users' private recipes are left out.
    """
    users = await load_users(store, (c.owner_id for c in cookbooks))
    recipes = await load_recipes(
        store, (rid for c in cookbooks for rid in c.recipe_ids)
    )

    views: list[CookbookView] = []
    for cookbook in cookbooks:
        visible = [
            CookbookRecipe(
                id=recipe.id,
                title=recipe.title,
                description=recipe.description,
                is_public=recipe.is_public,
            )
            for rid in cookbook.recipe_ids
            if (recipe := recipes.get(rid)) is not None
            and recipe_decision(Action.READ, recipe, requester_id) == Decision.ALLOW
        ]
        owner = users.get(cookbook.owner_id)
        views.append(
            CookbookView(
                **cookbook.model_dump(by_alias=False),
                owner=summarize_user(owner) if owner else None,
                recipes=visible,
            )
        )
    return views


async def populate_cookbook(
    store: EntityStore,
    cookbook: Cookbook,
    requester_id: str | None,
) -> CookbookView:
    (view,) = await populate_cookbooks(store, [cookbook], requester_id)
    return view


async def populate_reviews(
    store: EntityStore,
    reviews: Sequence[Review],
    *,
    recipes: dict[str, Recipe] | None = None,
) -> list[ReviewView]:
    """Attach reviewers and reviewed recipes.

    ``recipes`` may be passed when the caller has already loaded them.
    """
    users = await load_users(store, (r.reviewer_id for r in reviews))
    if recipes is None:
        recipes = await load_recipes(store, (r.recipe_id for r in reviews))

    views: list[ReviewView] = []
    for review in reviews:
        reviewer = users.get(review.reviewer_id)
        recipe = recipes.get(review.recipe_id)
        views.append(
            ReviewView(
                **review.model_dump(by_alias=False),
                reviewer=summarize_user(reviewer) if reviewer else None,
                recipe=(
                    ReviewRecipe(
                        id=recipe.id,
                        title=recipe.title,
                        description=recipe.description,
                    )
                    if recipe
                    else None
                ),
            )
        )
    return views


async def populate_review(store: EntityStore, review: Review) -> ReviewView:
    (view,) = await populate_reviews(store, [review])
    return view
