"""Recipe request and response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, NonNegativeInt

from recipe_service.domain.models import (
    Description,
    Ingredient,
    IngredientList,
    InstructionList,
    TagList,
    Title,
)
from recipe_service.schemas.base import APIRequest, APIResponse
from recipe_service.schemas.common import UserSummary


# =============================================================================
# Requests
# =============================================================================


class RecipeCreate(APIRequest):
    """Body of POST /recipes. The creator is always the caller."""

    title: Title
    description: Description = ""
    ingredients: IngredientList
    instructions: InstructionList
    prep_time_minutes: NonNegativeInt | None = None
    cook_time_minutes: NonNegativeInt | None = None
    servings: NonNegativeInt | None = None
    is_public: bool = False
    tags: TagList = Field(default_factory=list)


class RecipeUpdate(APIRequest):
    """Body of PUT /recipes/{id}. Only fields present are changed."""

    title: Title | None = None
    description: Description | None = None
    ingredients: IngredientList | None = None
    instructions: InstructionList | None = None
    prep_time_minutes: NonNegativeInt | None = None
    cook_time_minutes: NonNegativeInt | None = None
    servings: NonNegativeInt | None = None
    is_public: bool | None = None
    tags: TagList | None = None


# =============================================================================
# Responses
# =============================================================================


class RecipeView(APIResponse):
    """A recipe with its creator populated."""

    id: str
    creator_id: str
    creator: UserSummary | None = Field(
        default=None,
        description="Creator summary, null when the account no longer exists",
    )
    title: str
    description: str
    ingredients: list[Ingredient]
    instructions: list[str]
    prep_time_minutes: int | None = None
    cook_time_minutes: int | None = None
    servings: int | None = None
    is_public: bool
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class RecipeResponse(APIResponse):
    message: str
    recipe: RecipeView


class RecipeListResponse(APIResponse):
    message: str
    count: int
    recipes: list[RecipeView]


class RecipeDeleteResponse(APIResponse):
    message: str
    deleted_recipe_id: str
    deleted_review_count: int
