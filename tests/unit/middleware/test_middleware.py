"""Unit tests for the HTTP middleware stack."""

from __future__ import annotations

import uuid
from unittest.mock import patch

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from recipe_service.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from recipe_service.core.middleware.request_id import MAX_REQUEST_ID_LENGTH
from recipe_service.observability.logging import get_context


pytestmark = pytest.mark.unit


async def _echo(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "request_id": getattr(request.state, "request_id", None),
            "context": get_context(),
        }
    )


def _client(*middleware: type) -> TestClient:
    app = Starlette(
        routes=[
            Route("/api/v1/recipes", _echo),
            Route("/api/v1/health", _echo),
        ]
    )
    for cls in middleware:
        app.add_middleware(cls)
    return TestClient(app)


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def test_echoes_incoming_id(self) -> None:
        """Should reuse the caller's request id."""
        client = _client(RequestIDMiddleware)

        response = client.get("/api/v1/recipes", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json()["request_id"] == "abc-123"
        assert response.json()["context"]["request_id"] == "abc-123"

    def test_generates_id(self) -> None:
        """Should generate a UUID when none is sent."""
        client = _client(RequestIDMiddleware)

        response = client.get("/api/v1/recipes")

        uuid.UUID(response.headers["X-Request-ID"])

    def test_replaces_oversized_id(self) -> None:
        """Should not echo back absurdly long ids."""
        client = _client(RequestIDMiddleware)
        too_long = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        response = client.get("/api/v1/recipes", headers={"X-Request-ID": too_long})

        assert response.headers["X-Request-ID"] != too_long


class TestTimingMiddleware:
    """Tests for TimingMiddleware."""

    def test_adds_process_time(self) -> None:
        """Should add X-Process-Time in milliseconds."""
        client = _client(TimingMiddleware)

        response = client.get("/api/v1/recipes")

        assert response.headers["X-Process-Time"].endswith("ms")

    def test_warns_on_slow_requests(self) -> None:
        """Should log a warning above the threshold."""
        app = Starlette(routes=[Route("/slow", _echo)])
        app.add_middleware(TimingMiddleware, slow_threshold=-1.0)

        with patch("recipe_service.core.middleware.timing.logger") as mock_logger:
            TestClient(app).get("/slow")

        mock_logger.warning.assert_called_once()


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    def test_logs_start_and_completion(self) -> None:
        """Should log twice and bind request fields to the context."""
        client = _client(LoggingMiddleware)

        with patch("recipe_service.core.middleware.logging.logger") as mock_logger:
            response = client.get(
                "/api/v1/recipes", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"}
            )

        messages = [c.args[0] for c in mock_logger.info.call_args_list]
        assert messages == ["Request started", "Request completed"]
        context = response.json()["context"]
        assert context["method"] == "GET"
        assert context["path"] == "/api/v1/recipes"
        assert context["client_ip"] == "10.0.0.1"

    def test_skips_probes(self) -> None:
        """Should not log health checks."""
        client = _client(LoggingMiddleware)

        with patch("recipe_service.core.middleware.logging.logger") as mock_logger:
            client.get("/api/v1/health")

        mock_logger.info.assert_not_called()
