"""Custom middleware components."""

from recipe_service.core.middleware.logging import LoggingMiddleware
from recipe_service.core.middleware.request_id import RequestIDMiddleware
from recipe_service.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
