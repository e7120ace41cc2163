"""Tokens resource router.

Endpoints:
    POST /api/v1/tokens - Create tokens (refresh with rotation)
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from sessionguard.application.commands import RefreshSession
from sessionguard.application.commands.handlers import RefreshSessionHandler
from sessionguard.core.config import settings
from sessionguard.core.container import get_refresh_session_handler
from sessionguard.core.result import Failure, Success
from sessionguard.domain.errors import InvalidSessionError
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
from sessionguard.schemas.auth_schemas import TokenCreateResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenCreateResponse,
    responses={
        401: {"description": "Invalid or reused refresh token", "model": ProblemDetails},
        409: {"description": "Concurrent refresh conflict", "model": ProblemDetails},
    },
    summary="Create tokens",
    description="Rotate the refresh cookie and issue a new access token.",
)
async def create_tokens(
    request: Request,
    response: Response,
    handler: RefreshSessionHandler = Depends(get_refresh_session_handler),
) -> TokenCreateResponse | JSONResponse:
    """Refresh tokens.

    POST /api/v1/tokens → 201 Created

    The refresh cookie is replaced on every successful call and cleared
    when it is rejected. Replaying an old cookie ends the session.
    """
    refresh_secret = read_refresh_secret(request)
    if refresh_secret is None:
        rejected = ErrorResponseBuilder.from_domain_error(
            InvalidSessionError(cause="missing refresh cookie"), request
        )
        clear_refresh_cookie(rejected)
        return rejected

    command = RefreshSession(
        fingerprint=client_fingerprint(request),
        refresh_secret=refresh_secret,
    )

    match await handler.handle(command):
        case Failure(error=error):
            failed = ErrorResponseBuilder.from_domain_error(error, request)
            # A rejected cookie can never succeed again
            if error.is_unauthorized:
                clear_refresh_cookie(failed)
            return failed
        case Success(value=refreshed):
            set_refresh_cookie(response, refreshed.refresh_secret, refreshed.expires_at)
            return TokenCreateResponse(
                access_token=refreshed.access_token,
                expires_in=settings.access_token_expire_minutes * 60,
            )
