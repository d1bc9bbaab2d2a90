"""User service."""

from recipe_service.services.users.service import UserService


__all__ = ["UserService"]
