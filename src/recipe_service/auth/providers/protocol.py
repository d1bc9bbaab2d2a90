"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_service.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Interface every authentication provider implements.

    A provider turns the credential on a request into an AuthResult or
    raises an AuthenticationError. It never invents an identity.
    """

    @property
    def provider_name(self) -> str:
        """Short name used in logs, e.g. 'local_jwt' or 'header'."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Validate a credential and return the caller's identity.

        Args:
            token: The bearer token. Empty for header-based auth.
            request: The request, for providers that read headers.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
            AuthenticationError: For other authentication failures.
        """
        ...

    async def initialize(self) -> None:
        """Validate configuration at application startup."""
        ...

    async def shutdown(self) -> None:
        """Release provider resources at application shutdown."""
        ...
