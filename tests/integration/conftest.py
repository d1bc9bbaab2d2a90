"""Integration test fixtures.

Builds the full application on the in-memory entity store, runs its
lifespan and drives it over HTTP with httpx. Callers are identified with
the X-User-ID header unless a test builds a JWT-mode app.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from recipe_service.core.config import Settings
from recipe_service.core.config.settings import (
    AppSettings,
    AuthSettings,
    DatabaseSettings,
    FeaturesSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from recipe_service.database.store import USERS
from recipe_service.domain.models import User
from recipe_service.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import FastAPI


pytestmark = pytest.mark.integration

TEST_JWT_SECRET = "test-jwt-secret-key-for-integration-tests"  # noqa: S105


def build_settings(**overrides: Any) -> Settings:
    """Test settings: memory store, header auth, quiet logs, no metrics."""
    values: dict[str, Any] = {
        "APP_ENV": "test",
        "JWT_SECRET_KEY": TEST_JWT_SECRET,
        "GOOGLE_CLIENT_SECRET": None,
        "app": AppSettings(name="test-app", version="0.0.1-test"),
        "auth": AuthSettings(mode="header"),
        "database": DatabaseSettings(backend="memory"),
        "logging": LoggingSettings(level="WARNING", format="text"),
        "observability": ObservabilitySettings(
            metrics=MetricsSettings(enabled=False)
        ),
        "features": FeaturesSettings(),
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings() -> Settings:
    return build_settings()


@pytest.fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI]:
    """Create the app and run its lifespan around the test."""
    application = create_app(test_settings, metrics_registry=CollectorRegistry())
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def create_user(app: FastAPI) -> Callable[..., Awaitable[User]]:
    """Store a user directly and return it."""

    async def _create(display_name: str = "Test Cook", **fields: Any) -> User:
        doc = await app.state.entity_store.create(
            USERS, {"displayName": display_name} | fields
        )
        return User.model_validate(doc)

    return _create


def as_user(user_id: str) -> dict[str, str]:
    """Headers identifying the caller in header auth mode."""
    return {"X-User-ID": user_id}


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    return as_user


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Build test settings with selected sections overridden."""
    return build_settings
