"""Authentication provider exceptions.

Raised by providers and translated to 401 responses by the dependency
layer.
"""

from __future__ import annotations


class AuthProviderError(Exception):
    """Base exception for auth provider errors."""


class AuthenticationError(AuthProviderError):
    """Raised when the caller's identity cannot be established."""


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""


class TokenInvalidError(AuthenticationError):
    """Raised when a token is malformed or signature verification fails."""


class ConfigurationError(AuthProviderError):
    """Raised when the auth provider is misconfigured."""
