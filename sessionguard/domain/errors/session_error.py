"""Session lifecycle errors.

Returned (never raised) by Session.rotate_token and the refresh use case.
All of them are AuthenticationError subclasses, so the calling layer reports
them uniformly as "unauthorized" while logs keep the precise code.
"""

from dataclasses import dataclass
from uuid import UUID

from sessionguard.core.enums import ErrorCode
from sessionguard.core.errors import AuthenticationError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionError(AuthenticationError):
    """Base class for session state failures.

    Attributes:
        session_id: Session the failure refers to, when known.
    """

    session_id: UUID | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionNotActiveError(SessionError):
    """Session already left the active status."""

    code: ErrorCode = ErrorCode.SESSION_NOT_ACTIVE
    message: str = "Session is not active"


@dataclass(frozen=True, slots=True, kw_only=True)
class NoActiveRefreshTokenError(SessionError):
    """Active session without an active refresh token (session was revoked)."""

    code: ErrorCode = ErrorCode.NO_ACTIVE_REFRESH_TOKEN
    message: str = "Session has no active refresh token"


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionExpiredError(SessionError):
    """Session reached its absolute expiry."""

    code: ErrorCode = ErrorCode.SESSION_EXPIRED
    message: str = "Session has expired"


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshTokenReuseDetectedError(SessionError):
    """A non-current refresh secret was presented; the session is now dead."""

    code: ErrorCode = ErrorCode.REFRESH_TOKEN_REUSE_DETECTED
    message: str = "Refresh token reuse detected"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidSessionError(SessionError):
    """No usable session for the presented refresh secret.

    Attributes:
        cause: Diagnostic reason ("not found", "other device").
    """

    code: ErrorCode = ErrorCode.SESSION_INVALID
    message: str = "Invalid session"
    cause: str = "not found"
