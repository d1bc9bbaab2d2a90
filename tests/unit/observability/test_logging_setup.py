"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson
import pytest

from recipe_service.observability.logging import (
    InterceptHandler,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _reset_context() -> None:
    clear_context()


class TestLogContext:
    """Tests for the request-scoped logging context."""

    def test_bind_and_clear(self) -> None:
        """Should accumulate bound values until cleared."""
        bind_context(request_id="r1")
        bind_context(user_id="u1")

        assert get_context() == {"request_id": "r1", "user_id": "u1"}

        clear_context()
        assert get_context() == {}

    def test_get_context_returns_copy(self) -> None:
        """Should not expose the stored dict."""
        bind_context(request_id="r1")
        get_context()["request_id"] = "changed"

        assert get_context()["request_id"] == "r1"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_file_output(self, tmp_path: Path) -> None:
        """Should write JSON lines carrying the bound context."""
        log_file = tmp_path / "logs" / "service.log"
        setup_logging("INFO", "json", log_file=log_file)
        bind_context(request_id="req-42")

        get_logger("recipe_service.tests").info("Recipe created", recipe_id="p1")

        line = log_file.read_text().strip().splitlines()[-1]
        record = orjson.loads(line)
        assert record["message"] == "Recipe created"
        assert record["logger"] == "recipe_service.tests"
        assert record["recipe_id"] == "p1"
        assert record["request_id"] == "req-42"
        assert record["level"] == "INFO"

    def test_intercepts_stdlib_logging(self) -> None:
        """Should route standard library logging through Loguru."""
        setup_logging("DEBUG", "text")

        root_handlers = logging.getLogger().handlers
        assert any(isinstance(h, InterceptHandler) for h in root_handlers)
        assert logging.getLogger("httpx").level == logging.WARNING

    @pytest.mark.parametrize("console_format", ["json", "text"])
    def test_file_sink_unaffected_by_console_sink(
        self, tmp_path: Path, console_format: str
    ) -> None:
        """Should keep each sink's output independent of the other's."""
        log_file = tmp_path / "service.log"
        setup_logging("INFO", console_format, log_file=log_file)

        get_logger("recipe_service.recipes").info("Recipe updated", recipe_id="p2")
        get_logger("recipe_service.reviews").info("Review created")

        lines = [orjson.loads(x) for x in log_file.read_text().splitlines()]
        assert [r["logger"] for r in lines] == [
            "recipe_service.recipes",
            "recipe_service.reviews",
        ]
        assert "recipe_id" not in lines[1]
        for record in lines:
            assert not [key for key in record if key.startswith("_")]
