"""Domain errors package.

Usage:
    from sessionguard.domain.errors import SessionExpiredError, InvalidCredentialsError
"""

from sessionguard.domain.errors.authentication_error import (
    InvalidAccessTokenError,
    InvalidCredentialsError,
)
from sessionguard.domain.errors.session_error import (
    InvalidSessionError,
    NoActiveRefreshTokenError,
    RefreshTokenReuseDetectedError,
    SessionError,
    SessionExpiredError,
    SessionNotActiveError,
)

__all__ = [
    "InvalidAccessTokenError",
    "InvalidCredentialsError",
    "InvalidSessionError",
    "NoActiveRefreshTokenError",
    "RefreshTokenReuseDetectedError",
    "SessionError",
    "SessionExpiredError",
    "SessionNotActiveError",
]
