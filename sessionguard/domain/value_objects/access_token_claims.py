"""Verified access token claims."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenClaims:
    """Claims extracted from a verified access token.

    Attributes:
        subject: User ID (sub).
        issuer: Token issuer (iss).
        audience: Intended audiences (aud).
        expires_at: Expiry (exp).
        issued_at: Issue time (iat).
        token_id: Unique token identifier (jti).
    """

    subject: UUID
    issuer: str
    audience: tuple[str, ...]
    expires_at: datetime
    issued_at: datetime
    token_id: str
