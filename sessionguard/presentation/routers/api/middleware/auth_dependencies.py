"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating access tokens.

Usage:
    @router.delete("/sessions")
    async def delete_all_sessions(
        user_id: UUID = Depends(get_current_user_id),
    ):
        ...
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sessionguard.core.container import get_access_token_service, get_logger
from sessionguard.core.result import Failure, Success
from sessionguard.domain.protocols import AccessTokenProtocol, LoggerProtocol

# auto_error=True returns 401 (403 on older FastAPI) if no token provided
bearer_scheme = HTTPBearer(auto_error=True)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    token_service: Annotated[AccessTokenProtocol, Depends(get_access_token_service)],
    logger: Annotated[LoggerProtocol, Depends(get_logger)],
) -> UUID:
    """Get the authenticated user's ID from the Bearer access token.

    Args:
        credentials: Bearer token from Authorization header.
        token_service: Access token verifier (injected).
        logger: Logger (injected).

    Returns:
        User ID from the token's subject claim.

    Raises:
        HTTPException 401: If the token is invalid or expired.
    """
    match token_service.verify(credentials.credentials):
        case Success(value=claims):
            return claims.subject
        case Failure(error=error):
            logger.warning("access_token_rejected", cause=error.cause)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                headers={"WWW-Authenticate": "Bearer"},
            )
