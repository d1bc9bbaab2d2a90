"""Google login endpoints.

Provides:
- GET /auth/google to start the OAuth code flow
- GET /auth/google/callback to finish it and receive an access token
- GET /auth/status for the caller's authentication state
- GET /auth/login/failed, where failed logins are redirected
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import ORJSONResponse, RedirectResponse

from recipe_service.api.dependencies import (
    get_app_settings,
    get_oauth_client,
    get_user_service,
)
from recipe_service.auth.dependencies import OptionalUser
from recipe_service.auth.jwt import (
    create_access_token,
    create_state_token,
    verify_state_token,
)
from recipe_service.auth.oauth import GoogleOAuthClient, OAuthError  # noqa: TC001
from recipe_service.auth.providers import AuthenticationError
from recipe_service.core.config import Settings  # noqa: TC001
from recipe_service.observability.logging import get_logger
from recipe_service.schemas.auth import (
    AuthStatusResponse,
    LoginFailedResponse,
    LoginResponse,
)
from recipe_service.schemas.user import UserProfile
from recipe_service.services.users import UserService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

AppSettings = Annotated[Settings, Depends(get_app_settings)]
OAuthClient = Annotated[GoogleOAuthClient, Depends(get_oauth_client)]
Users = Annotated[UserService, Depends(get_user_service)]


def _login_url(request: Request) -> str:
    return str(request.url_for("google_login"))


@router.get(
    "/google",
    name="google_login",
    summary="Start Google login",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    response_class=RedirectResponse,
    responses={503: {"description": "Google login is not configured"}},
)
async def google_login(client: OAuthClient, settings: AppSettings) -> RedirectResponse:
    state = create_state_token(settings)
    return RedirectResponse(client.authorization_url(state))


@router.get(
    "/google/callback",
    response_model=LoginResponse,
    summary="Finish Google login",
    description=(
        "Exchanges the authorization code, creates or refreshes the user and "
        "returns a bearer access token. Failures redirect to /auth/login/failed."
    ),
    responses={
        307: {"description": "Login failed; redirect to /auth/login/failed"},
        503: {"description": "Google login is not configured"},
    },
)
async def google_callback(
    request: Request,
    client: OAuthClient,
    settings: AppSettings,
    users: Users,
    code: Annotated[str | None, Query()] = None,
    state: Annotated[str | None, Query()] = None,
    error: Annotated[str | None, Query()] = None,
) -> LoginResponse | RedirectResponse:
    failed = RedirectResponse(request.url_for("login_failed"))

    if error or not code or not state:
        logger.warning("Google login aborted", error=error, has_code=bool(code))
        return failed

    try:
        verify_state_token(state, settings)
        profile = await client.login(code)
    except (AuthenticationError, OAuthError) as e:
        logger.warning("Google login failed", reason=str(e))
        return failed

    user = await users.upsert_from_oauth(profile)
    issued = create_access_token(user.id, settings)
    return LoginResponse(
        message="Authentication successful",
        access_token=issued.token,
        expires_in=issued.expires_in,
        user=UserProfile.from_user(user),
    )


@router.get(
    "/status",
    response_model=AuthStatusResponse,
    response_model_exclude_none=True,
    summary="Authentication status",
)
async def auth_status(
    request: Request,
    user: OptionalUser,
    users: Users,
) -> AuthStatusResponse:
    if user is not None:
        account = await users.find(user.id)
        if account is not None:
            return AuthStatusResponse(
                authenticated=True,
                user=UserProfile.from_user(account),
            )
    return AuthStatusResponse(
        authenticated=False,
        message="User not authenticated",
        login_url=_login_url(request),
    )


@router.get(
    "/login/failed",
    name="login_failed",
    response_model=LoginFailedResponse,
    status_code=status.HTTP_401_UNAUTHORIZED,
    summary="Login failure notice",
)
async def login_failed(request: Request) -> ORJSONResponse:
    body = LoginFailedResponse(
        message="Authentication failed. Please try again.",
        login_url=_login_url(request),
    )
    return ORJSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=body.model_dump(mode="json"),
    )
