"""Cookbook endpoints.

Cookbooks are private to their owner. Recipes inside a cookbook are only
listed when the caller may read them.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from recipe_service.api.dependencies import get_cookbook_service
from recipe_service.auth.dependencies import OptionalUser, RequiredUser, requester_id
from recipe_service.schemas.cookbook import (
    CookbookCreate,
    CookbookDeleteResponse,
    CookbookListResponse,
    CookbookResponse,
    CookbookUpdate,
)
from recipe_service.services.cookbooks import CookbookService  # noqa: TC001


router = APIRouter(prefix="/cookbooks", tags=["Cookbooks"])

Service = Annotated[CookbookService, Depends(get_cookbook_service)]
CookbookId = Annotated[UUID, Path(alias="cookbookId", description="Cookbook id")]

_OWNER_ONLY = {
    401: {"description": "Authentication required"},
    403: {"description": "Not the owner"},
    404: {"description": "Cookbook not found"},
}


@router.get(
    "",
    response_model=CookbookListResponse,
    summary="List my cookbooks",
    responses={401: {"description": "Authentication required"}},
)
async def list_my_cookbooks(
    service: Service,
    user: RequiredUser,
) -> CookbookListResponse:
    cookbooks = await service.list_owned(user.id)
    return CookbookListResponse(
        message="User cookbooks retrieved successfully",
        count=len(cookbooks),
        cookbooks=cookbooks,
    )


@router.get(
    "/{cookbookId}",
    response_model=CookbookResponse,
    summary="Get a cookbook",
    responses=_OWNER_ONLY,
)
async def get_cookbook(
    cookbook_id: CookbookId,
    service: Service,
    user: OptionalUser,
) -> CookbookResponse:
    cookbook = await service.get(str(cookbook_id), requester_id(user))
    return CookbookResponse(
        message="Cookbook retrieved successfully",
        cookbook=cookbook,
    )


@router.post(
    "",
    response_model=CookbookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a cookbook",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
    },
)
async def create_cookbook(
    body: CookbookCreate,
    service: Service,
    user: RequiredUser,
) -> CookbookResponse:
    cookbook = await service.create(body, user.id)
    return CookbookResponse(message="Cookbook created successfully", cookbook=cookbook)


@router.put(
    "/{cookbookId}",
    response_model=CookbookResponse,
    summary="Update a cookbook",
    responses={400: {"description": "Validation failed"}, **_OWNER_ONLY},
)
async def update_cookbook(
    cookbook_id: CookbookId,
    body: CookbookUpdate,
    service: Service,
    user: RequiredUser,
) -> CookbookResponse:
    cookbook = await service.update(str(cookbook_id), body, user.id)
    return CookbookResponse(message="Cookbook updated successfully", cookbook=cookbook)


@router.delete(
    "/{cookbookId}",
    response_model=CookbookDeleteResponse,
    summary="Delete a cookbook",
    description="Deletes the cookbook only; the recipes in it are untouched.",
    responses=_OWNER_ONLY,
)
async def delete_cookbook(
    cookbook_id: CookbookId,
    service: Service,
    user: RequiredUser,
) -> CookbookDeleteResponse:
    await service.delete(str(cookbook_id), user.id)
    return CookbookDeleteResponse(
        message="Cookbook deleted successfully",
        deleted_cookbook_id=str(cookbook_id),
    )
