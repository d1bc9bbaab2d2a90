"""Embedded summaries shared by several response schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from recipe_service.schemas.base import APIResponse


if TYPE_CHECKING:
    from recipe_service.domain.models import User


class UserSummary(APIResponse):
    """Creator, owner or reviewer attached to a populated view."""

    id: str
    display_name: str
    first_name: str | None = None
    last_name: str | None = None


class PublicUser(APIResponse):
    """The part of a profile anyone may see."""

    id: str
    display_name: str

    @classmethod
    def from_user(cls, user: User) -> PublicUser:
        return cls(id=user.id, display_name=user.display_name)


class MessageResponse(APIResponse):
    """Response carrying only a human-readable message."""

    message: str = Field(..., description="Outcome message")
