"""Cookbook lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.core.exceptions import NotFoundError
from recipe_service.database.store import COOKBOOKS
from recipe_service.domain.models import Cookbook, to_document
from recipe_service.observability.logging import get_logger
from recipe_service.services.access import queries
from recipe_service.services.access.policy import (
    Action,
    cookbook_decision,
    enforce,
    require_requester,
)
from recipe_service.services.base import (
    changed_fields,
    store_operation,
    validate_document,
)
from recipe_service.services.populate import populate_cookbook, populate_cookbooks


if TYPE_CHECKING:
    from recipe_service.database.store import EntityStore
    from recipe_service.schemas.cookbook import (
        CookbookCreate,
        CookbookUpdate,
        CookbookView,
    )

logger = get_logger(__name__)


class CookbookService:
    """Cookbook operations on behalf of a requester.

    Cookbooks are private to their owner. When ``public_read`` is enabled
    anyone may read a cookbook by id; listing and writes stay owner-only.
    """

    def __init__(self, store: EntityStore, *, public_read: bool = False) -> None:
        self._store = store
        self._public_read = public_read

    async def _load(self, cookbook_id: str) -> Cookbook:
        doc = await self._store.find_by_id(COOKBOOKS, cookbook_id)
        if doc is None:
            raise NotFoundError("Cookbook", cookbook_id)
        return Cookbook.model_validate(doc)

    async def _authorize(
        self,
        action: Action,
        cookbook_id: str,
        requester_id: str | None,
    ) -> Cookbook:
        cookbook = await self._load(cookbook_id)
        verb = {Action.READ: "access", Action.UPDATE: "update"}.get(action, "delete")
        enforce(
            cookbook_decision(
                action, cookbook, requester_id, public_read=self._public_read
            ),
            forbidden=f"Access denied. You can only {verb} your own cookbooks.",
        )
        return cookbook

    @store_operation("Cookbook", "Failed to retrieve cookbooks")
    async def list_owned(self, requester_id: str | None) -> list[CookbookView]:
        owner_id = require_requester(requester_id)
        query = queries.owned_cookbooks(owner_id)
        docs = await self._store.find(COOKBOOKS, query.filter, query.sort)
        return await populate_cookbooks(
            self._store,
            [Cookbook.model_validate(d) for d in docs],
            owner_id,
        )

    @store_operation("Cookbook", "Failed to retrieve cookbook")
    async def get(self, cookbook_id: str, requester_id: str | None) -> CookbookView:
        cookbook = await self._authorize(Action.READ, cookbook_id, requester_id)
        return await populate_cookbook(self._store, cookbook, requester_id)

    @store_operation("Cookbook", "Failed to create cookbook")
    async def create(
        self,
        payload: CookbookCreate,
        requester_id: str | None,
    ) -> CookbookView:
        owner_id = require_requester(requester_id)
        document = payload.model_dump(mode="json", by_alias=True)
        document["ownerId"] = owner_id

        stored = await self._store.create(COOKBOOKS, document)
        cookbook = Cookbook.model_validate(stored)
        logger.info(
            "Cookbook created",
            cookbook_id=cookbook.id,
            owner_id=owner_id,
            recipe_count=len(cookbook.recipe_ids),
        )
        return await populate_cookbook(self._store, cookbook, owner_id)

    @store_operation("Cookbook", "Failed to update cookbook")
    async def update(
        self,
        cookbook_id: str,
        payload: CookbookUpdate,
        requester_id: str | None,
    ) -> CookbookView:
        cookbook = await self._authorize(Action.UPDATE, cookbook_id, requester_id)

        changes = changed_fields(payload)
        merged = validate_document(Cookbook, to_document(cookbook) | changes)
        stored = await self._store.update_by_id(
            COOKBOOKS, cookbook_id, to_document(merged)
        )
        logger.info("Cookbook updated", cookbook_id=cookbook_id, fields=sorted(changes))
        return await populate_cookbook(
            self._store, Cookbook.model_validate(stored), requester_id
        )

    @store_operation("Cookbook", "Failed to delete cookbook")
    async def delete(self, cookbook_id: str, requester_id: str | None) -> None:
        await self._authorize(Action.DELETE, cookbook_id, requester_id)
        await self._store.delete_by_id(COOKBOOKS, cookbook_id)
        logger.info("Cookbook deleted", cookbook_id=cookbook_id)
