"""Authentication schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from recipe_service.schemas.base import APIResponse
from recipe_service.schemas.user import UserProfile


class OAuthProfile(BaseModel):
    """Identity returned by Google's OpenID Connect userinfo endpoint.

    Field names follow the provider's snake_case claims.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    sub: str = Field(..., min_length=1, description="Provider account id")
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    email: str | None = None
    picture: str | None = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.given_name, self.family_name) if p]
        return self.name or " ".join(parts) or self.email or self.sub


class LoginResponse(APIResponse):
    """Returned by the OAuth callback after a successful login."""

    success: bool = True
    message: str
    access_token: str
    token_type: str = "bearer"  # noqa: S105
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserProfile


class AuthStatusResponse(APIResponse):
    authenticated: bool
    user: UserProfile | None = None
    message: str | None = None
    login_url: str | None = None


class LoginFailedResponse(APIResponse):
    success: bool = False
    message: str
    login_url: str
