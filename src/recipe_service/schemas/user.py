"""User profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

from pydantic import StringConstraints

from recipe_service.schemas.base import APIRequest, APIResponse
from recipe_service.schemas.common import PublicUser
from recipe_service.schemas.recipe import RecipeView


if TYPE_CHECKING:
    from recipe_service.domain.models import User


DisplayName = Annotated[str, StringConstraints(min_length=1, max_length=100)]
NamePart = Annotated[str, StringConstraints(max_length=100)]
ImageUrl = Annotated[str, StringConstraints(max_length=2048)]


class UserUpdate(APIRequest):
    """Body of PUT /users/me.

    ``oauthId`` and ``email`` come from the identity provider and cannot be
    changed here.
    """

    display_name: DisplayName | None = None
    first_name: NamePart | None = None
    last_name: NamePart | None = None
    profile_image_url: ImageUrl | None = None


class UserProfile(APIResponse):
    """The caller's own profile."""

    id: str
    display_name: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    profile_image_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls.model_validate(user.model_dump(exclude={"oauth_id"}))


class UserProfileResponse(APIResponse):
    message: str
    user: UserProfile


class PublicProfileResponse(APIResponse):
    message: str
    user: PublicUser


class UserRecipesResponse(APIResponse):
    """Another user's public recipes."""

    message: str
    user: PublicUser
    count: int
    recipes: list[RecipeView]


class UserDeleteResponse(APIResponse):
    message: str
    deleted_user_id: str
