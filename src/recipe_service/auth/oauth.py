"""Google OAuth 2.0 authorization code flow.

The login redirect carries a signed ``state``; the callback exchanges the
code for a Google access token and reads the OpenID Connect userinfo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from recipe_service.observability.logging import get_logger
from recipe_service.schemas.auth import OAuthProfile


if TYPE_CHECKING:
    from recipe_service.core.config import Settings
    from recipe_service.core.config.settings import GoogleOAuthSettings

logger = get_logger(__name__)


class OAuthError(Exception):
    """Raised when the Google login round trip fails."""


class GoogleOAuthClient:
    """Async HTTP client for Google's OAuth and userinfo endpoints."""

    def __init__(
        self,
        config: GoogleOAuthSettings,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.client_id:
            msg = "auth.google.client_id is required for Google login"
            raise ValueError(msg)
        self.config = config
        self.client_id = config.client_id
        self.client_secret = client_secret
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> GoogleOAuthClient | None:
        """Build the client, or None when Google credentials are missing."""
        if not settings.google_oauth_configured:
            logger.info("Google OAuth not configured; login routes disabled")
            return None
        return cls(settings.auth.google, settings.GOOGLE_CLIENT_SECRET or "")

    async def initialize(self) -> None:
        if self._http_client is not None:
            return
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
        )
        logger.info("GoogleOAuthClient initialized", client_id=self.client_id)

    async def shutdown(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("GoogleOAuthClient shutdown")

    def authorization_url(self, state: str) -> str:
        """URL of Google's consent page for this client."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.config.callback_url,
            "response_type": "code",
            "scope": " ".join(self.config.scopes),
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return str(httpx.URL(self.config.authorize_url, params=params))

    async def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            await self.initialize()
        assert self._http_client is not None
        return self._http_client

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a Google access token.

        Raises:
            OAuthError: If Google rejects the code or cannot be reached.
        """
        client = await self._client()
        try:
            response = await client.post(
                self.config.token_url,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.config.callback_url,
                    "grant_type": "authorization_code",
                },
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            access_token = response.json().get("access_token")

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google token exchange rejected",
                status_code=e.response.status_code,
            )
            msg = f"Token exchange failed with status {e.response.status_code}"
            raise OAuthError(msg) from e

        except httpx.RequestError as e:
            logger.error("Google token endpoint unreachable", error=str(e))
            msg = f"Cannot reach Google token endpoint: {e}"
            raise OAuthError(msg) from e

        except ValueError as e:
            msg = "Token endpoint returned invalid JSON"
            raise OAuthError(msg) from e

        if not access_token:
            msg = "Token endpoint response has no access_token"
            raise OAuthError(msg)
        return access_token

    async def fetch_profile(self, access_token: str) -> OAuthProfile:
        """Read the signed-in user's profile from the userinfo endpoint.

        Raises:
            OAuthError: If the request fails or the profile has no subject.
        """
        client = await self._client()
        try:
            response = await client.get(
                self.config.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
            return OAuthProfile.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google userinfo request rejected",
                status_code=e.response.status_code,
            )
            msg = f"Userinfo request failed with status {e.response.status_code}"
            raise OAuthError(msg) from e

        except httpx.RequestError as e:
            logger.error("Google userinfo endpoint unreachable", error=str(e))
            msg = f"Cannot reach Google userinfo endpoint: {e}"
            raise OAuthError(msg) from e

        except ValidationError as e:
            msg = "Userinfo response is missing the account id"
            raise OAuthError(msg) from e

        except ValueError as e:
            msg = "Userinfo endpoint returned invalid JSON"
            raise OAuthError(msg) from e

    async def login(self, code: str) -> OAuthProfile:
        """Complete the code flow and return the Google profile."""
        access_token = await self.exchange_code(code)
        return await self.fetch_profile(access_token)
