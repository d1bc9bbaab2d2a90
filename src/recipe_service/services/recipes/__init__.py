"""Recipe service."""

from recipe_service.services.recipes.service import RecipeService


__all__ = ["RecipeService"]
