"""Application factory for creating FastAPI instances.

create_app() configures the FastAPI application, the middleware stack,
exception handlers, API routers and metrics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_client import REGISTRY

from recipe_service.api.v1.router import router as v1_router
from recipe_service.core.config import Settings, get_settings
from recipe_service.core.events import lifespan
from recipe_service.core.exceptions import setup_exception_handlers
from recipe_service.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from recipe_service.observability.metrics import setup_metrics


if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry


def create_app(
    settings: Settings | None = None,
    *,
    metrics_registry: CollectorRegistry = REGISTRY,
) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().
        metrics_registry: Prometheus registry for HTTP metrics. Tests pass a
            fresh registry so several apps can coexist in one process.

    Returns:
        Configured FastAPI application instance. The entity store and auth
        provider are attached to ``app.state`` when the lifespan starts.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.v1_prefix
    docs_enabled = settings.is_non_production

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=(
            "Recipe Box - recipes, cookbooks and reviews with Google sign-in"
        ),
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url=f"{prefix}/docs" if docs_enabled else None,
        redoc_url=f"{prefix}/redoc" if docs_enabled else None,
        openapi_url=f"{prefix}/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    app.include_router(v1_router, prefix=prefix)

    setup_metrics(app, settings, registry=metrics_registry)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure the middleware stack.

    The last middleware added runs first on the request. From the request's
    perspective: RequestID, Timing, Logging, GZip, CORS.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
