"""Recipe endpoints.

Provides:
- GET /recipes and GET /recipes/mine for listing
- GET /recipes/{recipeId} for a single recipe, subject to visibility
- POST, PUT and DELETE for the creator's own recipes
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from recipe_service.api.dependencies import get_recipe_service
from recipe_service.auth.dependencies import OptionalUser, RequiredUser, requester_id
from recipe_service.schemas.recipe import (
    RecipeCreate,
    RecipeDeleteResponse,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from recipe_service.services.recipes import RecipeService  # noqa: TC001


router = APIRouter(prefix="/recipes", tags=["Recipes"])

Service = Annotated[RecipeService, Depends(get_recipe_service)]
RecipeId = Annotated[UUID, Path(alias="recipeId", description="Recipe id")]


@router.get(
    "",
    response_model=RecipeListResponse,
    summary="List public recipes",
)
async def list_public_recipes(service: Service) -> RecipeListResponse:
    """Every public recipe, newest first."""
    recipes = await service.list_public()
    return RecipeListResponse(
        message="Public recipes retrieved successfully",
        count=len(recipes),
        recipes=recipes,
    )


@router.get(
    "/mine",
    response_model=RecipeListResponse,
    summary="List my recipes",
    description="All recipes created by the caller, public and private.",
    responses={401: {"description": "Authentication required"}},
)
async def list_my_recipes(service: Service, user: RequiredUser) -> RecipeListResponse:
    recipes = await service.list_owned(user.id)
    return RecipeListResponse(
        message="User recipes retrieved successfully",
        count=len(recipes),
        recipes=recipes,
    )


@router.get(
    "/{recipeId}",
    response_model=RecipeResponse,
    summary="Get a recipe",
    description=(
        "Public recipes are visible to anyone; private ones only to their creator."
    ),
    responses={
        403: {"description": "Recipe is private"},
        404: {"description": "Recipe not found"},
    },
)
async def get_recipe(
    recipe_id: RecipeId,
    service: Service,
    user: OptionalUser,
) -> RecipeResponse:
    recipe = await service.get(str(recipe_id), requester_id(user))
    return RecipeResponse(message="Recipe retrieved successfully", recipe=recipe)


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
    },
)
async def create_recipe(
    body: RecipeCreate,
    service: Service,
    user: RequiredUser,
) -> RecipeResponse:
    recipe = await service.create(body, user.id)
    return RecipeResponse(message="Recipe created successfully", recipe=recipe)


@router.put(
    "/{recipeId}",
    response_model=RecipeResponse,
    summary="Update a recipe",
    description="Partial update; only the creator may change a recipe.",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the creator"},
        404: {"description": "Recipe not found"},
    },
)
async def update_recipe(
    recipe_id: RecipeId,
    body: RecipeUpdate,
    service: Service,
    user: RequiredUser,
) -> RecipeResponse:
    recipe = await service.update(str(recipe_id), body, user.id)
    return RecipeResponse(message="Recipe updated successfully", recipe=recipe)


@router.delete(
    "/{recipeId}",
    response_model=RecipeDeleteResponse,
    summary="Delete a recipe",
    description="Deletes the recipe and every review on it.",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the creator"},
        404: {"description": "Recipe not found"},
    },
)
async def delete_recipe(
    recipe_id: RecipeId,
    service: Service,
    user: RequiredUser,
) -> RecipeDeleteResponse:
    deleted_reviews = await service.delete(str(recipe_id), user.id)
    return RecipeDeleteResponse(
        message="Recipe deleted successfully",
        deleted_recipe_id=str(recipe_id),
        deleted_review_count=deleted_reviews,
    )
