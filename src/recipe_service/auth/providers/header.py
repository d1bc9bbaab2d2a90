"""Header-based authentication provider.

Trusts the user id header completely. Use it only for local development,
tests, or behind a gateway that has already authenticated the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_service.auth.providers.exceptions import AuthenticationError
from recipe_service.auth.providers.models import AuthResult
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Reads the caller's user id from a request header."""

    def __init__(self, user_id_header: str = "X-User-ID") -> None:
        self.user_id_header = user_id_header

    @property
    def provider_name(self) -> str:
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Extract the user id from the configured header.

        Raises:
            AuthenticationError: If request is None or the header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header, "").strip()
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        logger.debug("Authenticated via headers", user_id=user_id)
        return AuthResult(
            user_id=user_id,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers", "header": self.user_id_header},
        )

    async def initialize(self) -> None:
        logger.info(
            "HeaderAuthProvider initialized",
            user_id_header=self.user_id_header,
        )
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway"
        )

    async def shutdown(self) -> None:
        logger.debug("HeaderAuthProvider shutdown")
