"""Integration tests for the Prometheus metrics endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from recipe_service.core.config.settings import MetricsSettings, ObservabilitySettings
from recipe_service.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_service.core.config import Settings


pytestmark = pytest.mark.integration


class TestMetrics:
    """Tests for GET /api/v1/metrics."""

    @pytest.mark.asyncio
    async def test_exposes_http_metrics(
        self, settings_factory: Callable[..., Settings]
    ) -> None:
        """Should expose request metrics under the service namespace."""
        settings = settings_factory(
            observability=ObservabilitySettings(metrics=MetricsSettings(enabled=True))
        )
        app = create_app(settings, metrics_registry=CollectorRegistry())

        async with (
            app.router.lifespan_context(app),
            AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac,
        ):
            await ac.get("/api/v1/recipes")
            response = await ac.get("/api/v1/metrics")

        assert response.status_code == 200
        assert "recipe_box_http_" in response.text

    @pytest.mark.asyncio
    async def test_disabled(self, client: AsyncClient) -> None:
        """Should not serve metrics when disabled."""
        response = await client.get("/api/v1/metrics")

        assert response.status_code == 404
