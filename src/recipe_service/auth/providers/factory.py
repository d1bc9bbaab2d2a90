"""Authentication provider factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.auth.providers.exceptions import ConfigurationError
from recipe_service.auth.providers.header import HeaderAuthProvider
from recipe_service.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_service.core.config import AuthMode
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_service.auth.providers.protocol import AuthProvider
    from recipe_service.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def resolve_jwt_secret(settings: Settings) -> str:
    """Return the JWT signing secret.

    Raises:
        ConfigurationError: If the secret is not set in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


def create_auth_provider(settings: Settings) -> AuthProvider:
    """Create the authentication provider selected by ``auth.mode``.

    - LOCAL_JWT: validates access tokens issued after Google login
    - HEADER: trusts the user id header (development and tests only)

    Raises:
        ConfigurationError: If the mode is unknown or a production
            deployment is missing its JWT secret.
    """
    try:
        mode = settings.auth_mode_enum
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.HEADER:
        if settings.is_production:
            logger.warning("Header auth mode is enabled in production")
        return HeaderAuthProvider(user_id_header=settings.auth.headers.user_id)

    return LocalJWTAuthProvider(
        secret_key=resolve_jwt_secret(settings),
        algorithm=settings.auth.jwt.algorithm,
        issuer=settings.auth.jwt.issuer,
    )
