"""Pluggable authentication providers.

Available providers:
- LocalJWTAuthProvider: validates JWTs issued by this service
- HeaderAuthProvider: trusts a user id header (development only)

The active provider is created at startup and kept on
``app.state.auth_provider``.
"""

from recipe_service.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_service.auth.providers.factory import (
    create_auth_provider,
    resolve_jwt_secret,
)
from recipe_service.auth.providers.header import HeaderAuthProvider
from recipe_service.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_service.auth.providers.models import AuthResult
from recipe_service.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthenticationError",
    "ConfigurationError",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "resolve_jwt_secret",
]
