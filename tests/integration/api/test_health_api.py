"""Integration tests for the health endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest


if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


pytestmark = pytest.mark.integration


class TestHealth:
    """Tests for the liveness and readiness probes."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        """Should report healthy with version and environment."""
        response = await client.get("/api/v1/health")

        data = response.json()
        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert data["version"] == "0.0.1-test"
        assert data["environment"] == "test"
        assert "timestamp" in data

    @pytest.mark.asyncio
    async def test_ready(self, client: AsyncClient) -> None:
        """Should report ready when the store is healthy."""
        response = await client.get("/api/v1/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["dependencies"] == {"database": "healthy"}

    @pytest.mark.asyncio
    async def test_degraded(self, app: FastAPI, client: AsyncClient) -> None:
        """Should return 503 when the store is unhealthy."""
        store = app.state.entity_store
        unhealthy = AsyncMock(return_value={"database": "unhealthy"})

        with patch.object(store, "health", unhealthy):
            response = await client.get("/api/v1/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient) -> None:
        """Should echo the caller's request id."""
        response = await client.get(
            "/api/v1/health", headers={"X-Request-ID": "req-42"}
        )

        assert response.headers["x-request-id"] == "req-42"
