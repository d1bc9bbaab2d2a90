"""Unit tests for access and OAuth state token issuance."""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from recipe_service.auth.jwt import (
    STATE_TOKEN_TYPE,
    create_access_token,
    create_state_token,
    verify_state_token,
)
from recipe_service.auth.providers import LocalJWTAuthProvider, create_auth_provider
from recipe_service.auth.providers.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_service.core.config import Settings
from recipe_service.core.config.settings import AuthSettings, JwtSettings


pytestmark = pytest.mark.unit

SECRET = "unit-test-jwt-secret"  # noqa: S105


@pytest.fixture
def settings() -> Settings:
    return Settings(
        APP_ENV="test",
        JWT_SECRET_KEY=SECRET,
        auth=AuthSettings(
            mode="local_jwt",
            jwt=JwtSettings(access_token_expire_minutes=15, issuer="recipe-box-test"),
        ),
    )


class TestCreateAccessToken:
    """Tests for create_access_token."""

    def test_claims(self, settings: Settings) -> None:
        """Should carry subject, type, issuer and expiry."""
        issued = create_access_token("user-1", settings)

        claims = jwt.decode(
            issued.token, SECRET, algorithms=["HS256"], issuer="recipe-box-test"
        )
        assert claims["sub"] == "user-1"
        assert claims["type"] == "access"
        assert claims["exp"] - claims["iat"] == 15 * 60
        assert issued.expires_in == 15 * 60

    def test_custom_lifetime(self, settings: Settings) -> None:
        """Should honour expires_delta."""
        issued = create_access_token(
            "user-1", settings, expires_delta=timedelta(minutes=2)
        )

        assert issued.expires_in == 120

    @pytest.mark.asyncio
    async def test_accepted_by_local_provider(self, settings: Settings) -> None:
        """Should validate with the provider built from the same settings."""
        provider = create_auth_provider(settings)
        assert isinstance(provider, LocalJWTAuthProvider)

        result = await provider.validate_token(
            create_access_token("user-1", settings).token
        )

        assert result.user_id == "user-1"

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, settings: Settings) -> None:
        """Should be refused once expired."""
        provider = create_auth_provider(settings)
        issued = create_access_token(
            "user-1", settings, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(TokenExpiredError):
            await provider.validate_token(issued.token)


class TestStateToken:
    """Tests for OAuth state tokens."""

    def test_round_trip(self, settings: Settings) -> None:
        """Should verify a state issued by this service."""
        state = create_state_token(settings)

        verify_state_token(state, settings)

        claims = jwt.get_unverified_claims(state)
        assert claims["type"] == STATE_TOKEN_TYPE
        assert claims["nonce"]

    def test_states_are_unique(self, settings: Settings) -> None:
        """Should include a fresh nonce each time."""
        assert create_state_token(settings) != create_state_token(settings)

    def test_rejects_tampered_state(self, settings: Settings) -> None:
        """Should reject states signed with another key."""
        forged = jwt.encode({"type": STATE_TOKEN_TYPE}, "other", algorithm="HS256")

        with pytest.raises(TokenInvalidError, match="Invalid OAuth state"):
            verify_state_token(forged, settings)

    def test_rejects_access_token_as_state(self, settings: Settings) -> None:
        """Should not accept an access token in place of a state."""
        token = create_access_token("user-1", settings).token

        with pytest.raises(TokenInvalidError):
            verify_state_token(token, settings)

    @pytest.mark.asyncio
    async def test_state_is_not_an_access_token(self, settings: Settings) -> None:
        """Should not authenticate with a state token."""
        provider = create_auth_provider(settings)

        with pytest.raises(TokenInvalidError):
            await provider.validate_token(create_state_token(settings))

    def test_expired_state(self, settings: Settings) -> None:
        """Should report expiry separately."""
        expired = settings.model_copy(
            update={
                "auth": settings.auth.model_copy(
                    update={
                        "google": settings.auth.google.model_copy(
                            update={"state_ttl_seconds": -1}
                        )
                    }
                )
            }
        )
        state = create_state_token(expired)

        with pytest.raises(TokenExpiredError, match="OAuth state has expired"):
            verify_state_token(state, settings)
