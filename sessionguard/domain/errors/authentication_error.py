"""Credential and access token errors."""

from dataclasses import dataclass

from sessionguard.core.enums import ErrorCode
from sessionguard.core.errors import AuthenticationError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentialsError(AuthenticationError):
    """Email/password pair did not authenticate.

    Unknown email and wrong password produce the same error so callers cannot
    probe which accounts exist.
    """

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = "Invalid email or password"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidAccessTokenError(AuthenticationError):
    """Access token failed verification.

    Attributes:
        cause: Diagnostic reason (expired, bad signature, missing claim, ...).
    """

    code: ErrorCode = ErrorCode.TOKEN_INVALID
    message: str = "Invalid access token"
    cause: str = "invalid"
