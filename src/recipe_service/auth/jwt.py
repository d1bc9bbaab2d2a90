"""JWT issuance for logged-in users and OAuth state.

Access tokens are validated by LocalJWTAuthProvider. State tokens protect
the Google redirect round trip against forgery and carry no identity.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from recipe_service.auth.providers.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_service.auth.providers.factory import resolve_jwt_secret
from recipe_service.auth.providers.local_jwt import ACCESS_TOKEN_TYPE
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.core.config import Settings

logger = get_logger(__name__)

STATE_TOKEN_TYPE = "oauth_state"  # noqa: S105


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """An encoded access token and its lifetime in seconds."""

    token: str
    expires_in: int


def _encode(claims: dict[str, Any], settings: Settings, lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {**claims, "iat": now, "exp": now + lifetime}
    if settings.auth.jwt.issuer:
        payload["iss"] = settings.auth.jwt.issuer
    return jwt.encode(
        payload,
        resolve_jwt_secret(settings),
        algorithm=settings.auth.jwt.algorithm,
    )


def create_access_token(
    subject: str,
    settings: Settings,
    *,
    expires_delta: timedelta | None = None,
) -> IssuedToken:
    """Create an access token whose 'sub' is the User id.

    Args:
        subject: The User id.
        settings: Application settings (secret, algorithm, lifetime).
        expires_delta: Custom lifetime. Defaults to
            ``auth.jwt.access_token_expire_minutes``.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.auth.jwt.access_token_expire_minutes)

    token = _encode(
        {"sub": subject, "type": ACCESS_TOKEN_TYPE},
        settings,
        expires_delta,
    )
    return IssuedToken(token=token, expires_in=int(expires_delta.total_seconds()))


def create_state_token(settings: Settings) -> str:
    """Create a short-lived, signed OAuth ``state`` value."""
    return _encode(
        {"type": STATE_TOKEN_TYPE, "nonce": secrets.token_urlsafe(16)},
        settings,
        timedelta(seconds=settings.auth.google.state_ttl_seconds),
    )


def verify_state_token(token: str, settings: Settings) -> None:
    """Check a ``state`` value returned by the OAuth redirect.

    Raises:
        TokenExpiredError: If the login took longer than the state lifetime.
        TokenInvalidError: If the value was not issued by this service.
    """
    try:
        payload = jwt.decode(
            token,
            resolve_jwt_secret(settings),
            algorithms=[settings.auth.jwt.algorithm],
            issuer=settings.auth.jwt.issuer,
        )
    except ExpiredSignatureError as e:
        msg = "OAuth state has expired"
        raise TokenExpiredError(msg) from e
    except JWTError as e:
        logger.warning("Invalid OAuth state", error=str(e))
        msg = "Invalid OAuth state"
        raise TokenInvalidError(msg) from e

    if payload.get("type") != STATE_TOKEN_TYPE:
        msg = "Invalid OAuth state"
        raise TokenInvalidError(msg)
