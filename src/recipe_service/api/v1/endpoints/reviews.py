"""Review endpoints.

Reviews are readable when their recipe is; one review per user per
recipe. Listing a recipe's reviews also returns the average rating.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from recipe_service.api.dependencies import get_review_service
from recipe_service.auth.dependencies import OptionalUser, RequiredUser, requester_id
from recipe_service.schemas.review import (
    RecipeReviewsResponse,
    ReviewCreate,
    ReviewDeleteResponse,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)
from recipe_service.services.reviews import ReviewService  # noqa: TC001


router = APIRouter(prefix="/reviews", tags=["Reviews"])

Service = Annotated[ReviewService, Depends(get_review_service)]
ReviewId = Annotated[UUID, Path(alias="reviewId", description="Review id")]
RecipeId = Annotated[UUID, Path(alias="recipeId", description="Recipe id")]


@router.get(
    "",
    response_model=ReviewListResponse,
    summary="List reviews on public recipes",
)
async def list_public_reviews(service: Service) -> ReviewListResponse:
    reviews = await service.list_on_public_recipes()
    return ReviewListResponse(
        message="Reviews retrieved successfully",
        count=len(reviews),
        reviews=reviews,
    )


@router.get(
    "/mine",
    response_model=ReviewListResponse,
    summary="List my reviews",
    responses={401: {"description": "Authentication required"}},
)
async def list_my_reviews(service: Service, user: RequiredUser) -> ReviewListResponse:
    reviews = await service.list_authored(user.id)
    return ReviewListResponse(
        message="User reviews retrieved successfully",
        count=len(reviews),
        reviews=reviews,
    )


@router.get(
    "/recipe/{recipeId}",
    response_model=RecipeReviewsResponse,
    summary="List a recipe's reviews",
    description="Reviews on one recipe with their count and average rating.",
    responses={
        403: {"description": "Recipe is private"},
        404: {"description": "Recipe not found"},
    },
)
async def list_recipe_reviews(
    recipe_id: RecipeId,
    service: Service,
    user: OptionalUser,
) -> RecipeReviewsResponse:
    result = await service.list_for_recipe(str(recipe_id), requester_id(user))
    return RecipeReviewsResponse(
        message="Reviews retrieved successfully",
        recipe_id=result.recipe_id,
        count=result.summary.count,
        average_rating=result.summary.average_rating,
        reviews=result.reviews,
    )


@router.post(
    "/recipe/{recipeId}",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a recipe",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
        403: {"description": "Recipe is private"},
        404: {"description": "Recipe not found"},
        409: {"description": "Already reviewed"},
    },
)
async def create_review(
    recipe_id: RecipeId,
    body: ReviewCreate,
    service: Service,
    user: RequiredUser,
) -> ReviewResponse:
    review = await service.create(str(recipe_id), body, user.id)
    return ReviewResponse(message="Review created successfully", review=review)


@router.get(
    "/{reviewId}",
    response_model=ReviewResponse,
    summary="Get a review",
    responses={
        403: {"description": "Review is on a private recipe"},
        404: {"description": "Review not found"},
    },
)
async def get_review(
    review_id: ReviewId,
    service: Service,
    user: OptionalUser,
) -> ReviewResponse:
    review = await service.get(str(review_id), requester_id(user))
    return ReviewResponse(message="Review retrieved successfully", review=review)


@router.put(
    "/{reviewId}",
    response_model=ReviewResponse,
    summary="Update a review",
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the author"},
        404: {"description": "Review not found"},
    },
)
async def update_review(
    review_id: ReviewId,
    body: ReviewUpdate,
    service: Service,
    user: RequiredUser,
) -> ReviewResponse:
    review = await service.update(str(review_id), body, user.id)
    return ReviewResponse(message="Review updated successfully", review=review)


@router.delete(
    "/{reviewId}",
    response_model=ReviewDeleteResponse,
    summary="Delete a review",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the author"},
        404: {"description": "Review not found"},
    },
)
async def delete_review(
    review_id: ReviewId,
    service: Service,
    user: RequiredUser,
) -> ReviewDeleteResponse:
    await service.delete(str(review_id), user.id)
    return ReviewDeleteResponse(
        message="Review deleted successfully",
        deleted_review_id=str(review_id),
    )
