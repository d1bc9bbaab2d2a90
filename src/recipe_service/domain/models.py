"""Stored document models.

These are the canonical shapes of users, recipes, cookbooks and reviews as
they live in the entity store. Every mutation re-validates the full document
against its model before persisting, so a partial update can never leave a
document in a shape the create path would have rejected.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, Field, NonNegativeInt, StringConstraints

from recipe_service.schemas.base import StoredDocument


def _not_blank(value: str) -> str:
    if not value.strip():
        msg = "must not be blank"
        raise ValueError(msg)
    return value


def dedupe_tags(tags: list[str]) -> list[str]:
    """Drop repeated tags, keeping the first occurrence."""
    return list(dict.fromkeys(tags))


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]
Title = Annotated[
    str, StringConstraints(min_length=1, max_length=100), AfterValidator(_not_blank)
]
Description = Annotated[str, StringConstraints(max_length=500)]
Tag = Annotated[
    str, StringConstraints(min_length=1, max_length=50), AfterValidator(_not_blank)
]
TagList = Annotated[list[Tag], AfterValidator(dedupe_tags)]
Comment = Annotated[
    str, StringConstraints(min_length=1, max_length=1000), AfterValidator(_not_blank)
]
Rating = Annotated[int, Field(ge=1, le=5)]


class Ingredient(StoredDocument):
    """One line of a recipe's ingredient list."""

    name: NonBlankStr
    quantity: NonBlankStr


IngredientList = Annotated[list[Ingredient], Field(min_length=1)]
InstructionList = Annotated[list[NonBlankStr], Field(min_length=1)]


class _Timestamped(StoredDocument):
    id: str
    created_at: datetime
    updated_at: datetime


class User(_Timestamped):
    """An account created on first OAuth login."""

    oauth_id: str | None = None
    display_name: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    profile_image_url: str | None = None


class Recipe(_Timestamped):
    """A recipe; private unless ``is_public`` is set."""

    creator_id: str
    title: Title
    description: Description = ""
    ingredients: IngredientList
    instructions: InstructionList
    prep_time_minutes: NonNegativeInt | None = None
    cook_time_minutes: NonNegativeInt | None = None
    servings: NonNegativeInt | None = None
    is_public: bool = False
    tags: TagList = Field(default_factory=list)


class Cookbook(_Timestamped):
    """An ordered collection of recipe references owned by one user."""

    owner_id: str
    name: Title
    description: Description = ""
    recipe_ids: list[str] = Field(default_factory=list)


class Review(_Timestamped):
    """A rating and comment left by one user on one recipe."""

    reviewer_id: str
    recipe_id: str
    rating: Rating
    comment: Comment


def to_document(model: StoredDocument, **overrides: Any) -> dict[str, Any]:
    """Dump a model to the camelCase dict the entity store expects."""
    return model.model_dump(mode="json", by_alias=True) | overrides
