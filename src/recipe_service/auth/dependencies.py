"""FastAPI security dependencies.

Resolve the caller's identity through the auth provider kept on
``app.state.auth_provider``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from recipe_service.auth.providers import (
    AuthenticationError,
    AuthProvider,
    AuthResult,
    HeaderAuthProvider,
    TokenExpiredError,
)
from recipe_service.core.exceptions import UnauthorizedError
from recipe_service.observability.logging import bind_context


# Used for token extraction only; validation is the provider's job.
oauth2_scheme_optional = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/google",
    scheme_name="JWT",
    description="Access token returned by the Google login callback",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str
    token_type: str = "access"

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> CurrentUser:
        return cls(id=result.user_id, token_type=result.token_type)


def get_auth_provider(request: Request) -> AuthProvider:
    return request.app.state.auth_provider


def _has_credentials(
    provider: AuthProvider,
    request: Request,
    token: str | None,
) -> bool:
    if isinstance(provider, HeaderAuthProvider):
        return bool(request.headers.get(provider.user_id_header))
    return bool(token)


async def _authenticate(
    provider: AuthProvider,
    request: Request,
    token: str | None,
) -> CurrentUser:
    try:
        result = await provider.validate_token(token or "", request)
    except TokenExpiredError:
        raise UnauthorizedError("Token has expired") from None
    except AuthenticationError as e:
        raise UnauthorizedError(str(e) or "Authentication failed") from None

    bind_context(user_id=result.user_id)
    return CurrentUser.from_auth_result(result)


async def get_current_user(
    request: Request,
    provider: Annotated[AuthProvider, Depends(get_auth_provider)],
    token: Annotated[str | None, Depends(oauth2_scheme_optional)],
) -> CurrentUser:
    """Require an authenticated caller.

    Raises:
        UnauthorizedError: 401 if credentials are missing or invalid.
    """
    if not _has_credentials(provider, request, token):
        raise UnauthorizedError()
    return await _authenticate(provider, request, token)


async def get_current_user_optional(
    request: Request,
    provider: Annotated[AuthProvider, Depends(get_auth_provider)],
    token: Annotated[str | None, Depends(oauth2_scheme_optional)],
) -> CurrentUser | None:
    """Resolve the caller if they sent credentials.

    Missing or invalid credentials yield an anonymous caller (None).
    """
    if not _has_credentials(provider, request, token):
        return None
    try:
        return await _authenticate(provider, request, token)
    except UnauthorizedError:
        return None


RequiredUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_current_user_optional)]


def requester_id(user: CurrentUser | None) -> str | None:
    """The id services authorize against, or None for anonymous callers."""
    return user.id if user is not None else None
