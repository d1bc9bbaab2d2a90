"""API v1 router aggregating all endpoint routers.

Mounted under ``api.v1_prefix`` (default /api/v1).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_service.api.v1.endpoints import (
    auth,
    cookbooks,
    health,
    recipes,
    reviews,
    users,
)


router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(recipes.router)
router.include_router(cookbooks.router)
router.include_router(reviews.router)
router.include_router(users.router)
