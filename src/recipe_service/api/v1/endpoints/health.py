"""Health check endpoints.

Liveness and readiness probes for load balancers and orchestrators.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import ORJSONResponse

from recipe_service.api.dependencies import get_app_settings, get_entity_store
from recipe_service.core.config import Settings  # noqa: TC001
from recipe_service.database.store import EntityStore  # noqa: TC001
from recipe_service.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Reports that the process is up. Dependencies are not checked.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks the entity store; returns 503 while it is unavailable.",
    responses={503: {"description": "A dependency is unhealthy"}},
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[EntityStore, Depends(get_entity_store)],
) -> ReadinessResponse | ORJSONResponse:
    dependencies = await store.health()
    ready = all(state == "healthy" for state in dependencies.values())

    body = ReadinessResponse(
        status="ready" if ready else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
    if ready:
        return body
    return ORJSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
