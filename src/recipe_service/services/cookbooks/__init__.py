"""Cookbook service."""

from recipe_service.services.cookbooks.service import CookbookService


__all__ = ["CookbookService"]
