"""Integration tests for the cookbook endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from recipe_service.core.config.settings import FeaturesSettings
from recipe_service.factory import create_app
from tests.factories.payloads import CookbookCreateFactory, RecipeCreateFactory


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_service.core.config import Settings


pytestmark = pytest.mark.integration

COOKBOOKS = "/api/v1/cookbooks"


async def _recipe(client: AsyncClient, owner: str, *, is_public: bool) -> str:
    response = await client.post(
        "/api/v1/recipes",
        json=RecipeCreateFactory.payload(is_public=is_public),
        headers={"X-User-ID": owner},
    )
    return response.json()["recipe"]["id"]


async def _cookbook(client: AsyncClient, owner: str, recipe_ids: list[str]) -> dict:
    response = await client.post(
        COOKBOOKS,
        json=CookbookCreateFactory.payload(recipe_ids),
        headers={"X-User-ID": owner},
    )
    assert response.status_code == 201, response.text
    return response.json()["cookbook"]


class TestCookbooks:
    """Tests for cookbook CRUD."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient) -> None:
        """Should create and list the caller's cookbooks."""
        recipe_id = await _recipe(client, "cook", is_public=True)
        cookbook = await _cookbook(client, "cook", [recipe_id])
        await _cookbook(client, "someone-else", [])

        response = await client.get(COOKBOOKS, headers={"X-User-ID": "cook"})

        data = response.json()
        assert data["message"] == "User cookbooks retrieved successfully"
        assert [c["id"] for c in data["cookbooks"]] == [cookbook["id"]]
        assert cookbook["ownerId"] == "cook"
        assert cookbook["recipes"][0]["id"] == recipe_id

    @pytest.mark.asyncio
    async def test_hides_other_users_private_recipes(
        self, client: AsyncClient
    ) -> None:
        """Should omit referenced recipes the owner may not read."""
        theirs = await _recipe(client, "other", is_public=False)
        mine = await _recipe(client, "cook", is_public=False)
        cookbook = await _cookbook(client, "cook", [theirs, mine])

        response = await client.get(
            f"{COOKBOOKS}/{cookbook['id']}", headers={"X-User-ID": "cook"}
        )

        data = response.json()["cookbook"]
        assert data["recipeIds"] == [theirs, mine]
        assert [r["id"] for r in data["recipes"]] == [mine]

    @pytest.mark.asyncio
    async def test_owner_only_access(self, client: AsyncClient) -> None:
        """Should refuse other users and anonymous readers."""
        cookbook = await _cookbook(client, "cook", [])
        url = f"{COOKBOOKS}/{cookbook['id']}"

        assert (await client.get(url, headers={"X-User-ID": "other"})).status_code == 403
        assert (await client.get(url)).status_code == 401
        put = await client.put(
            url, json={"name": "Mine"}, headers={"X-User-ID": "other"}
        )
        assert put.status_code == 403

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient) -> None:
        """Should let the owner rename and delete."""
        cookbook = await _cookbook(client, "cook", [])
        url = f"{COOKBOOKS}/{cookbook['id']}"

        renamed = await client.put(
            url, json={"name": "Weeknights"}, headers={"X-User-ID": "cook"}
        )
        deleted = await client.delete(url, headers={"X-User-ID": "cook"})

        assert renamed.json()["cookbook"]["name"] == "Weeknights"
        assert deleted.json() == {
            "message": "Cookbook deleted successfully",
            "deletedCookbookId": cookbook["id"],
        }
        assert (await client.get(url, headers={"X-User-ID": "cook"})).status_code == 404

    @pytest.mark.asyncio
    async def test_rejects_malformed_recipe_ids(self, client: AsyncClient) -> None:
        """Should return 400 when recipeIds are not UUIDs."""
        response = await client.post(
            COOKBOOKS,
            json={"name": "Bad", "recipeIds": ["nope"]},
            headers={"X-User-ID": "cook"},
        )

        assert response.status_code == 400


class TestPublicCookbookRead:
    """Tests for the public_cookbook_read feature flag."""

    @pytest.mark.asyncio
    async def test_anonymous_read_when_enabled(
        self, settings_factory: Callable[..., Settings]
    ) -> None:
        """Should let anyone read a cookbook but not change it."""
        settings = settings_factory(
            features=FeaturesSettings(public_cookbook_read=True)
        )
        app = create_app(settings, metrics_registry=CollectorRegistry())

        async with (
            app.router.lifespan_context(app),
            AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac,
        ):
            cookbook = await _cookbook(ac, "cook", [])
            url = f"{COOKBOOKS}/{cookbook['id']}"

            read = await ac.get(url)
            write = await ac.put(url, json={"name": "x"}, headers={"X-User-ID": "x"})

        assert read.status_code == 200
        assert write.status_code == 403
