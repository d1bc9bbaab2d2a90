"""Cookbook request and response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from recipe_service.domain.models import Description, Title
from recipe_service.schemas.base import APIRequest, APIResponse
from recipe_service.schemas.common import UserSummary


class CookbookCreate(APIRequest):
    """Body of POST /cookbooks. The owner is always the caller."""

    name: Title
    description: Description = ""
    recipe_ids: list[UUID] = Field(default_factory=list)


class CookbookUpdate(APIRequest):
    """Body of PUT /cookbooks/{id}. Only fields present are changed."""

    name: Title | None = None
    description: Description | None = None
    recipe_ids: list[UUID] | None = None


class CookbookRecipe(APIResponse):
    """A referenced recipe as shown inside a cookbook."""

    id: str
    title: str
    description: str
    is_public: bool


class CookbookView(APIResponse):
    """A cookbook with owner and readable recipes populated."""

    id: str
    owner_id: str
    owner: UserSummary | None = None
    name: str
    description: str
    recipe_ids: list[str]
    recipes: list[CookbookRecipe] = Field(
        default_factory=list,
        description="Referenced recipes that still exist and are readable",
    )
    created_at: datetime
    updated_at: datetime


class CookbookResponse(APIResponse):
    message: str
    cookbook: CookbookView


class CookbookListResponse(APIResponse):
    message: str
    count: int
    cookbooks: list[CookbookView]


class CookbookDeleteResponse(APIResponse):
    message: str
    deleted_cookbook_id: str
