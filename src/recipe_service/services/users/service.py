"""User profiles and OAuth account provisioning."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.core.exceptions import NotFoundError
from recipe_service.database.exceptions import DuplicateDocumentError
from recipe_service.database.store import USERS
from recipe_service.domain.models import User, to_document
from recipe_service.observability.logging import get_logger
from recipe_service.services.access.policy import require_requester
from recipe_service.services.base import (
    changed_fields,
    store_operation,
    validate_document,
)
from recipe_service.services.recipes.service import RecipeService


if TYPE_CHECKING:
    from recipe_service.database.store import EntityStore
    from recipe_service.schemas.auth import OAuthProfile
    from recipe_service.schemas.recipe import RecipeView
    from recipe_service.schemas.user import UserUpdate

logger = get_logger(__name__)


class UserService:
    """Profile reads and writes, plus the OAuth login upsert."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def _load(self, user_id: str) -> User:
        doc = await self._store.find_by_id(USERS, user_id)
        if doc is None:
            raise NotFoundError("User", user_id)
        return User.model_validate(doc)

    @store_operation("User", "Failed to retrieve user profile")
    async def get_profile(self, requester_id: str | None) -> User:
        return await self._load(require_requester(requester_id))

    @store_operation("User", "Failed to retrieve user profile")
    async def find(self, user_id: str) -> User | None:
        doc = await self._store.find_by_id(USERS, user_id)
        return User.model_validate(doc) if doc is not None else None

    @store_operation("User", "Failed to update user profile")
    async def update_profile(
        self,
        requester_id: str | None,
        payload: UserUpdate,
    ) -> User:
        user = await self._load(require_requester(requester_id))
        changes = changed_fields(payload)
        merged = validate_document(User, to_document(user) | changes)
        stored = await self._store.update_by_id(USERS, user.id, to_document(merged))
        logger.info("User profile updated", user_id=user.id, fields=sorted(changes))
        return User.model_validate(stored)

    @store_operation("User", "Failed to delete account")
    async def delete_account(self, requester_id: str | None) -> str:
        """Delete the caller's account.

        Recipes, cookbooks and reviews the user owns are left in place.
        """
        user_id = require_requester(requester_id)
        await self._store.delete_by_id(USERS, user_id)
        logger.info("User account deleted", user_id=user_id)
        return user_id

    @store_operation("User", "Failed to retrieve user")
    async def get_public(self, user_id: str) -> User:
        return await self._load(user_id)

    @store_operation("User", "Failed to retrieve user recipes")
    async def public_recipes(self, user_id: str) -> tuple[User, list[RecipeView]]:
        """A user's public recipes, newest first."""
        user = await self._load(user_id)
        recipes = await RecipeService(self._store).list_public_by_creator(user_id)
        return user, recipes

    @store_operation("User", "Failed to sign in")
    async def upsert_from_oauth(self, profile: OAuthProfile) -> User:
        """Create the user on first login, refresh their profile afterwards."""
        fields = {
            "displayName": profile.display_name,
            "firstName": profile.given_name,
            "lastName": profile.family_name,
            "email": profile.email,
            "profileImageUrl": profile.picture,
        }

        existing = await self._store.find(USERS, {"oauthId": profile.sub})
        if not existing:
            try:
                stored = await self._store.create(
                    USERS, {"oauthId": profile.sub, **fields}
                )
            except DuplicateDocumentError:
                # A concurrent first login created the account; refresh it.
                existing = await self._store.find(USERS, {"oauthId": profile.sub})
                if not existing:
                    raise
            else:
                logger.info("User created from OAuth login", user_id=stored["id"])
                return User.model_validate(stored)

        stored = await self._store.update_by_id(USERS, existing[0]["id"], fields)
        logger.info("User signed in", user_id=stored["id"])
        return User.model_validate(stored)
