"""Unit tests for InMemoryEntityStore."""

from __future__ import annotations

import copy
from unittest.mock import patch

import pytest

from recipe_service.database.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
)
from recipe_service.database.memory import InMemoryEntityStore, matches
from recipe_service.database.store import (
    DESCENDING,
    RECIPES,
    REVIEWS,
    USERS,
    EntityStore,
    in_,
)


pytestmark = pytest.mark.unit


class TestCreate:
    """Tests for create and find_by_id."""

    @pytest.mark.asyncio
    async def test_assigns_id_and_timestamps(self, store: InMemoryEntityStore) -> None:
        """Should assign a server id and equal created/updated timestamps."""
        doc = await store.create(USERS, {"displayName": "Ada"})

        assert doc["id"]
        assert doc["createdAt"] == doc["updatedAt"]
        assert doc["createdAt"].tzinfo is not None

    @pytest.mark.asyncio
    async def test_ignores_client_reserved_keys(
        self, store: InMemoryEntityStore
    ) -> None:
        """Should never take id or timestamps from the caller."""
        doc = await store.create(
            USERS, {"id": "chosen", "createdAt": "yesterday", "displayName": "Ada"}
        )

        assert doc["id"] != "chosen"
        assert doc["createdAt"] != "yesterday"

    @pytest.mark.asyncio
    async def test_returns_copies(self, store: InMemoryEntityStore) -> None:
        """Should not let callers mutate stored documents."""
        doc = await store.create(USERS, {"displayName": "Ada"})
        doc["displayName"] = "Changed"

        stored = await store.find_by_id(USERS, doc["id"])
        assert stored is not None
        assert stored["displayName"] == "Ada"

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, store: InMemoryEntityStore) -> None:
        """Should return None for unknown ids."""
        assert await store.find_by_id(USERS, "missing") is None

    @pytest.mark.asyncio
    async def test_unknown_collection(self, store: InMemoryEntityStore) -> None:
        """Should reject collections outside the known set."""
        with pytest.raises(ValueError, match="Unknown collection"):
            await store.create("widgets", {})

    def test_satisfies_protocol(self, store: InMemoryEntityStore) -> None:
        """Should implement the EntityStore protocol."""
        assert isinstance(store, EntityStore)


class TestUniqueKeys:
    """Tests for unique key enforcement."""

    @pytest.mark.asyncio
    async def test_duplicate_review_rejected(self, store: InMemoryEntityStore) -> None:
        """Should refuse a second review by the same user on the same recipe."""
        review = {"reviewerId": "u1", "recipeId": "r1", "rating": 5, "comment": "x"}
        await store.create(REVIEWS, review)

        with pytest.raises(DuplicateDocumentError):
            await store.create(REVIEWS, review)

    @pytest.mark.asyncio
    async def test_same_user_other_recipe_allowed(
        self, store: InMemoryEntityStore
    ) -> None:
        """Should only collide on the full key."""
        await store.create(REVIEWS, {"reviewerId": "u1", "recipeId": "r1"})
        await store.create(REVIEWS, {"reviewerId": "u1", "recipeId": "r2"})

        assert len(await store.find(REVIEWS)) == 2

    @pytest.mark.asyncio
    async def test_none_values_never_collide(self, store: InMemoryEntityStore) -> None:
        """Should allow many users without an oauthId."""
        await store.create(USERS, {"displayName": "A", "oauthId": None})
        await store.create(USERS, {"displayName": "B"})

        assert len(await store.find(USERS)) == 2

    @pytest.mark.asyncio
    async def test_update_into_collision(self, store: InMemoryEntityStore) -> None:
        """Should refuse updates that would duplicate a unique key."""
        await store.create(USERS, {"displayName": "A", "oauthId": "g-1"})
        other = await store.create(USERS, {"displayName": "B", "oauthId": "g-2"})

        with pytest.raises(DuplicateDocumentError):
            await store.update_by_id(USERS, other["id"], {"oauthId": "g-1"})


class TestFind:
    """Tests for find filtering and sorting."""

    @pytest.mark.asyncio
    async def test_equality_and_in_filters(self, store: InMemoryEntityStore) -> None:
        """Should match on equality and $in clauses together."""
        a = await store.create(RECIPES, {"creatorId": "u1", "isPublic": True})
        await store.create(RECIPES, {"creatorId": "u1", "isPublic": False})
        c = await store.create(RECIPES, {"creatorId": "u2", "isPublic": True})

        found = await store.find(
            RECIPES, {"isPublic": True, "creatorId": in_(["u1", "u2"])}
        )

        assert {d["id"] for d in found} == {a["id"], c["id"]}

    @pytest.mark.asyncio
    async def test_newest_first(self, store: InMemoryEntityStore) -> None:
        """Should order by createdAt descending."""
        first = await store.create(RECIPES, {"title": "first"})
        second = await store.create(RECIPES, {"title": "second"})

        found = await store.find(RECIPES, None, (("createdAt", DESCENDING),))

        assert [d["id"] for d in found] == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, store: InMemoryEntityStore) -> None:
        """Should be stable when sort keys tie."""
        ids = [
            (await store.create(RECIPES, {"rank": 1, "n": n}))["id"] for n in range(3)
        ]

        found = await store.find(RECIPES, None, (("rank", DESCENDING),))

        assert [d["id"] for d in found] == ids

    def test_matches_missing_field(self) -> None:
        """Should not match a missing field against $in."""
        assert not matches({}, {"a": in_([None])})
        assert matches({"a": 1}, None)


class TestUpdateAndDelete:
    """Tests for update_by_id, delete_by_id and delete_many."""

    @pytest.mark.asyncio
    async def test_update_merges_and_bumps_timestamp(
        self, store: InMemoryEntityStore
    ) -> None:
        """Should merge the partial and advance updatedAt only."""
        doc = await store.create(USERS, {"displayName": "Ada", "email": "a@x.io"})

        updated = await store.update_by_id(
            USERS, doc["id"], {"displayName": "Ada L.", "id": "hijack"}
        )

        assert updated["id"] == doc["id"]
        assert updated["displayName"] == "Ada L."
        assert updated["email"] == "a@x.io"
        assert updated["createdAt"] == doc["createdAt"]
        assert updated["updatedAt"] > doc["updatedAt"]

    @pytest.mark.asyncio
    async def test_update_missing(self, store: InMemoryEntityStore) -> None:
        """Should raise DocumentNotFoundError."""
        with pytest.raises(DocumentNotFoundError):
            await store.update_by_id(USERS, "missing", {"displayName": "x"})

    @pytest.mark.asyncio
    async def test_delete_by_id(self, store: InMemoryEntityStore) -> None:
        """Should remove and return the document."""
        doc = await store.create(USERS, {"displayName": "Ada"})

        removed = await store.delete_by_id(USERS, doc["id"])

        assert removed["id"] == doc["id"]
        assert await store.find_by_id(USERS, doc["id"]) is None
        with pytest.raises(DocumentNotFoundError):
            await store.delete_by_id(USERS, doc["id"])

    @pytest.mark.asyncio
    async def test_delete_returns_copy(self, store: InMemoryEntityStore) -> None:
        """Should return a detached copy of the removed document."""
        doc = await store.create(RECIPES, {"title": "Soup", "tags": ["winter"]})

        with patch(
            "recipe_service.database.memory.copy.deepcopy", wraps=copy.deepcopy
        ) as deepcopy:
            removed = await store.delete_by_id(RECIPES, doc["id"])

        assert removed == doc
        deepcopy.assert_called_once()
        assert deepcopy.call_args.args[0] == doc
        assert deepcopy.call_args.args[0] is not removed

    @pytest.mark.asyncio
    async def test_delete_many_counts(self, store: InMemoryEntityStore) -> None:
        """Should delete every match and report how many."""
        await store.create(REVIEWS, {"reviewerId": "a", "recipeId": "r1"})
        await store.create(REVIEWS, {"reviewerId": "b", "recipeId": "r1"})
        await store.create(REVIEWS, {"reviewerId": "a", "recipeId": "r2"})

        assert await store.delete_many(REVIEWS, {"recipeId": "r1"}) == 2
        assert await store.delete_many(REVIEWS, {"recipeId": "r1"}) == 0
        assert len(await store.find(REVIEWS)) == 1

    @pytest.mark.asyncio
    async def test_health(self, store: InMemoryEntityStore) -> None:
        """Should always report healthy."""
        assert await store.health() == {"database": "healthy"}
