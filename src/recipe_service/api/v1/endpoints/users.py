"""User endpoints.

The caller's own profile under /users/me, public profiles and public
recipes of any user under /users/{userId}.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from recipe_service.api.dependencies import get_user_service
from recipe_service.auth.dependencies import RequiredUser
from recipe_service.schemas.common import PublicUser
from recipe_service.schemas.user import (
    PublicProfileResponse,
    UserDeleteResponse,
    UserProfile,
    UserProfileResponse,
    UserRecipesResponse,
    UserUpdate,
)
from recipe_service.services.users import UserService  # noqa: TC001


router = APIRouter(prefix="/users", tags=["Users"])

Service = Annotated[UserService, Depends(get_user_service)]
UserId = Annotated[UUID, Path(alias="userId", description="User id")]


@router.get(
    "/me",
    response_model=UserProfileResponse,
    summary="Get my profile",
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "No account for this identity"},
    },
)
async def get_my_profile(service: Service, user: RequiredUser) -> UserProfileResponse:
    profile = await service.get_profile(user.id)
    return UserProfileResponse(
        message="User profile retrieved successfully",
        user=UserProfile.from_user(profile),
    )


@router.put(
    "/me",
    response_model=UserProfileResponse,
    summary="Update my profile",
    description="Partial update of display name, names and profile image.",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
        404: {"description": "No account for this identity"},
    },
)
async def update_my_profile(
    body: UserUpdate,
    service: Service,
    user: RequiredUser,
) -> UserProfileResponse:
    profile = await service.update_profile(user.id, body)
    return UserProfileResponse(
        message="User profile updated successfully",
        user=UserProfile.from_user(profile),
    )


@router.delete(
    "/me",
    response_model=UserDeleteResponse,
    summary="Delete my account",
    description="Removes the account. Recipes, cookbooks and reviews are kept.",
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "No account for this identity"},
    },
)
async def delete_my_account(service: Service, user: RequiredUser) -> UserDeleteResponse:
    deleted_id = await service.delete_account(user.id)
    return UserDeleteResponse(
        message="User account deleted successfully",
        deleted_user_id=deleted_id,
    )


@router.get(
    "/{userId}",
    response_model=PublicProfileResponse,
    summary="Get a public profile",
    responses={404: {"description": "User not found"}},
)
async def get_public_profile(user_id: UserId, service: Service) -> PublicProfileResponse:
    profile = await service.get_public(str(user_id))
    return PublicProfileResponse(
        message="User profile retrieved successfully",
        user=PublicUser.from_user(profile),
    )


@router.get(
    "/{userId}/recipes",
    response_model=UserRecipesResponse,
    summary="List a user's public recipes",
    responses={404: {"description": "User not found"}},
)
async def list_user_recipes(user_id: UserId, service: Service) -> UserRecipesResponse:
    profile, recipes = await service.public_recipes(str(user_id))
    return UserRecipesResponse(
        message="User recipes retrieved successfully",
        user=PublicUser.from_user(profile),
        count=len(recipes),
        recipes=recipes,
    )
