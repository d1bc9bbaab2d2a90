"""Review request and response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_service.domain.models import Comment, Rating
from recipe_service.schemas.base import APIRequest, APIResponse
from recipe_service.schemas.common import UserSummary


class ReviewCreate(APIRequest):
    """Body of POST /reviews/recipe/{recipeId}."""

    rating: Rating
    comment: Comment


class ReviewUpdate(APIRequest):
    """Body of PUT /reviews/{id}. The recipe a review belongs to never changes."""

    rating: Rating | None = None
    comment: Comment | None = None


class ReviewRecipe(APIResponse):
    """The reviewed recipe as shown inside a review."""

    id: str
    title: str
    description: str


class ReviewView(APIResponse):
    """A review with reviewer and recipe populated."""

    id: str
    reviewer_id: str
    reviewer: UserSummary | None = None
    recipe_id: str
    recipe: ReviewRecipe | None = None
    rating: int
    comment: str
    created_at: datetime
    updated_at: datetime


class ReviewResponse(APIResponse):
    message: str
    review: ReviewView


class ReviewListResponse(APIResponse):
    message: str
    count: int
    reviews: list[ReviewView]


class RecipeReviewsResponse(APIResponse):
    """Reviews on one recipe together with the aggregate rating."""

    message: str
    recipe_id: str
    count: int
    average_rating: float = Field(
        ...,
        description="Mean rating rounded to one decimal; 0 when there are none",
    )
    reviews: list[ReviewView]


class ReviewDeleteResponse(APIResponse):
    message: str
    deleted_review_id: str
