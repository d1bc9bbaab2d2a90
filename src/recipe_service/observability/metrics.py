"""Prometheus metrics instrumentation.

HTTP request metrics are collected by prometheus-fastapi-instrumentator and
exposed under the API prefix so the gateway can route them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import REGISTRY
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from prometheus_client import CollectorRegistry

    from recipe_service.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_box"
METRIC_SUBSYSTEM = "http"


def setup_metrics(
    app: FastAPI,
    settings: Settings,
    registry: CollectorRegistry = REGISTRY,
) -> Instrumentator | None:
    """Configure Prometheus metrics instrumentation.

    Collects request count, latency histogram and request/response sizes by
    handler, method and status, and exposes them at ``{prefix}/metrics``.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
        registry: Collector registry to register metrics in.

    Returns:
        The configured Instrumentator, or None when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix
    endpoint = f"{prefix}/metrics"

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            endpoint,
            f"{prefix}/openapi.json",
            f"{prefix}/docs",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
        registry=registry,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem=METRIC_SUBSYSTEM,
            registry=registry,
        )
    )
    instrumentator.add(
        metrics.response_size(
            should_include_handler=True,
            should_include_method=True,
            should_include_status=True,
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem=METRIC_SUBSYSTEM,
            registry=registry,
        )
    )

    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=endpoint, tags=["Monitoring"])

    logger.info("Prometheus metrics configured", endpoint=endpoint)
    return instrumentator


__all__ = ["setup_metrics"]
