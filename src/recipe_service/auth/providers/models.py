"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Identity established by an auth provider.

    Attributes:
        user_id: Id of the authenticated User (the token's 'sub' claim).
        token_type: Kind of credential that was validated (access, header).
        issuer: Token issuer, when the credential carries one.
        expires_at: Token expiration timestamp.
        issued_at: Token issuance timestamp.
        raw_claims: Original claims, kept for debugging.
    """

    user_id: str = Field(..., min_length=1, description="Authenticated user id")
    token_type: str = Field(default="access", description="Type of validated token")
    issuer: str | None = Field(default=None, description="Token issuer")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    issued_at: int | None = Field(default=None, description="Issuance timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}
