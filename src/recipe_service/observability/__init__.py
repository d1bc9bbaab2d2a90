"""Logging and metrics."""

from recipe_service.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)
from recipe_service.observability.metrics import setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "setup_metrics",
]
