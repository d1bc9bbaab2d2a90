"""Request logging middleware."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_service.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line when a request starts and one when it completes.

    Paths ending in one of ``exclude_suffixes`` (health probes, metrics
    scrapes) are passed through silently.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_suffixes: tuple[str, ...] = ("/health", "/ready", "/metrics"),
    ) -> None:
        super().__init__(app)
        self.exclude_suffixes = exclude_suffixes

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Probes and scrapes stay out of the log
        if request.url.path.endswith(self.exclude_suffixes):
            return await call_next(request)

        # Request context for every line logged below
        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )

        # Incoming request
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        response = await call_next(request)

        # Outcome
        logger.info("Request completed", status_code=response.status_code)
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Client IP, preferring the first X-Forwarded-For hop."""
        # Set by reverse proxies; the first hop is the original client
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        # Single-hop proxies
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        # Direct connection
        if request.client:
            return request.client.host

        return "unknown"
