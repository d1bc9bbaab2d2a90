"""Ownership-scoped list queries.

Each builder returns the filter and sort for one listing endpoint. Owner
listings apply no visibility filter: a user always sees all of their own
documents, private ones included.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recipe_service.database.store import DESCENDING, Filter, Sort, in_


if TYPE_CHECKING:
    from collections.abc import Iterable

NEWEST_FIRST: Sort = (("createdAt", DESCENDING),)


@dataclass(frozen=True, slots=True)
class Query:
    """A filter plus sort, consumed by ``EntityStore.find``."""

    filter: Filter = field(default_factory=dict)
    sort: Sort = NEWEST_FIRST


def owned_recipes(user_id: str) -> Query:
    return Query({"creatorId": user_id})


def public_recipes() -> Query:
    return Query({"isPublic": True})


def public_recipes_by_creator(user_id: str) -> Query:
    return Query({"creatorId": user_id, "isPublic": True})


def owned_cookbooks(user_id: str) -> Query:
    return Query({"ownerId": user_id})


def authored_reviews(user_id: str) -> Query:
    return Query({"reviewerId": user_id})


def reviews_for_recipe(recipe_id: str) -> Query:
    """Reviews on one recipe. The caller has already checked visibility."""
    return Query({"recipeId": recipe_id})


def reviews_on_recipes(recipe_ids: Iterable[str]) -> Query:
    """Reviews on any of ``recipe_ids``.

    Used with the ids from ``public_recipes()`` to list every review on a
    public recipe.
    """
    return Query({"recipeId": in_(list(recipe_ids))})
