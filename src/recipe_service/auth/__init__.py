"""Authentication.

This package provides:
- Pluggable auth providers (local JWT, trusted header)
- JWT issuance after Google login
- The Google OAuth code flow client
- FastAPI security dependencies
"""

from recipe_service.auth.dependencies import (
    CurrentUser,
    OptionalUser,
    RequiredUser,
    get_current_user,
    get_current_user_optional,
)
from recipe_service.auth.jwt import create_access_token


__all__ = [
    "CurrentUser",
    "OptionalUser",
    "RequiredUser",
    "create_access_token",
    "get_current_user",
    "get_current_user_optional",
]
