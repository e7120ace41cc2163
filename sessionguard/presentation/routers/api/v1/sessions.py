"""Sessions resource router.

Endpoints:
    POST   /api/v1/sessions         - Create session (login)
    DELETE /api/v1/sessions/current - Delete current session (logout)
    DELETE /api/v1/sessions         - Delete all sessions (logout everywhere)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from sessionguard.application.commands import (
    LoginUser,
    LogoutAllSessions,
    LogoutSession,
)
from sessionguard.application.commands.handlers import (
    LoginUserHandler,
    LogoutAllSessionsHandler,
    LogoutSessionHandler,
)
from sessionguard.core.config import settings
from sessionguard.core.container import (
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_session_handler,
)
from sessionguard.core.result import Failure, Success
from sessionguard.presentation.routers.api.middleware.auth_dependencies import (
    get_current_user_id,
)
from sessionguard.presentation.routers.api.v1.errors import (
    ErrorResponseBuilder,
    ProblemDetails,
)
from sessionguard.presentation.routers.api.v1.refresh_cookie import (
    clear_refresh_cookie,
    client_fingerprint,
    read_refresh_secret,
    set_refresh_cookie,
)
from sessionguard.schemas.auth_schemas import (
    SessionCreateRequest,
    SessionCreateResponse,
    SessionRevokeAllResponse,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionCreateResponse,
    responses={
        401: {"description": "Invalid credentials", "model": ProblemDetails},
        409: {"description": "Concurrent request conflict", "model": ProblemDetails},
    },
    summary="Create session",
    description="Authenticate and open a session, or reuse this client's session.",
)
async def create_session(
    request: Request,
    response: Response,
    data: SessionCreateRequest,
    handler: LoginUserHandler = Depends(get_login_user_handler),
) -> SessionCreateResponse | JSONResponse:
    """Create a session (login).

    POST /api/v1/sessions → 201 Created

    Sets the refresh cookie. A valid refresh cookie for this client is reused
    instead of opening a second session.
    """
    command = LoginUser(
        email=data.email,
        password=data.password,
        fingerprint=client_fingerprint(request),
        refresh_secret=read_refresh_secret(request),
    )

    match await handler.handle(command):
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
        case Success(value=login):
            set_refresh_cookie(response, login.refresh_secret, login.expires_at)
            return SessionCreateResponse(
                access_token=login.access_token,
                expires_in=settings.access_token_expire_minutes * 60,
            )


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={401: {"description": "Not authenticated", "model": ProblemDetails}},
    summary="Delete current session",
    description="Logout by ending the session identified by the refresh cookie.",
)
async def delete_current_session(
    request: Request,
    user_id: UUID = Depends(get_current_user_id),
    handler: LogoutSessionHandler = Depends(get_logout_session_handler),
) -> Response:
    """Delete the current session (logout).

    DELETE /api/v1/sessions/current → 204 No Content

    Succeeds even when no matching session exists. The access token stays
    valid until it expires.
    """
    command = LogoutSession(
        user_id=user_id,
        fingerprint=client_fingerprint(request),
        refresh_secret=read_refresh_secret(request),
    )

    match await handler.handle(command):
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
        case Success():
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
            clear_refresh_cookie(response)
            return response


@router.delete(
    "",
    status_code=status.HTTP_200_OK,
    response_model=SessionRevokeAllResponse,
    responses={
        401: {"description": "Not authenticated", "model": ProblemDetails},
        500: {"description": "Some sessions could not be revoked", "model": ProblemDetails},
    },
    summary="Delete all sessions",
    description="Logout everywhere by ending every active session of the caller.",
)
async def delete_all_sessions(
    request: Request,
    response: Response,
    user_id: UUID = Depends(get_current_user_id),
    handler: LogoutAllSessionsHandler = Depends(get_logout_all_sessions_handler),
) -> SessionRevokeAllResponse | JSONResponse:
    """Delete all sessions of the caller.

    DELETE /api/v1/sessions → 200 OK
    """
    match await handler.handle(LogoutAllSessions(user_id=user_id)):
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
        case Success(value=revoked_count):
            clear_refresh_cookie(response)
            return SessionRevokeAllResponse(revoked_count=revoked_count)
