"""Local JWT authentication provider.

Validates the access tokens this service issues after a Google login,
using the shared signing secret.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from recipe_service.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_service.auth.providers.models import AuthResult
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"  # noqa: S105


class LocalJWTAuthProvider:
    """Validates JWTs with the configured secret key.

    Attributes:
        secret_key: The HMAC secret tokens are signed with.
        algorithm: JWT signing algorithm (default: HS256).
        issuer: Expected 'iss' claim value, or None to skip the check.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer

    @property
    def provider_name(self) -> str:
        return "local_jwt"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Decode the token and return the identity in its 'sub' claim.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed, the signature fails,
                or it is not an access token.
        """
        if not token:
            msg = "Missing bearer token"
            raise TokenInvalidError(msg)

        decode_kwargs: dict[str, Any] = {"algorithms": [self.algorithm]}
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer

        try:
            payload = jwt.decode(token, self.secret_key, **decode_kwargs)
        except ExpiredSignatureError as e:
            logger.debug("Token expired during local validation")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e
        except JWTClaimsError as e:
            logger.warning("JWT claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e
        except JWTError as e:
            logger.warning("JWT validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        # OAuth state tokens share the secret; only access tokens authenticate.
        token_type = payload.get("type")
        if token_type != ACCESS_TOKEN_TYPE:
            msg = f"Invalid token type: {token_type}. Expected 'access'."
            raise TokenInvalidError(msg)

        user_id = payload.get("sub")
        if not user_id:
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=user_id,
            token_type=token_type,
            issuer=payload.get("iss"),
            expires_at=payload.get("exp"),
            issued_at=payload.get("iat"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        if not self.secret_key:
            msg = "JWT secret key is not configured"
            raise ConfigurationError(msg)

        logger.info(
            "LocalJWTAuthProvider initialized",
            algorithm=self.algorithm,
            issuer_validation=self.issuer is not None,
        )

    async def shutdown(self) -> None:
        logger.debug("LocalJWTAuthProvider shutdown")
