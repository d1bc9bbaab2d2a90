"""Review service."""

from recipe_service.services.reviews.service import RecipeReviews, ReviewService


__all__ = ["RecipeReviews", "ReviewService"]
