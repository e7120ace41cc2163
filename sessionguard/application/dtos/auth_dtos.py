"""Authentication DTOs (Data Transfer Objects).

Input and result dataclasses shared by the session command handlers.

DTOs:
    - ClientFingerprint: Client identity presented with every request
    - LoginResult: Result from LoginUser command
    - RefreshResult: Result from RefreshSession command
"""

from dataclasses import dataclass
from datetime import datetime

from sessionguard.domain.value_objects import RefreshSecret


@dataclass(frozen=True, kw_only=True)
class ClientFingerprint:
    """Identifies the client (device) a request comes from.

    Attributes:
        client_id: Client identifier. Sessions are bound to it.
        ip: Client IP address, if known.
        user_agent: Client user agent, if known.
    """

    client_id: str
    ip: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Response from successful login.

    Attributes:
        access_token: Short-lived JWT.
        refresh_secret: Secret to hand to the client (new or echoed).
        expires_at: Session expiry, also the refresh cookie expiry.
    """

    access_token: str
    refresh_secret: RefreshSecret
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class RefreshResult:
    """Response from successful refresh (rotation)."""

    access_token: str
    refresh_secret: RefreshSecret
    expires_at: datetime
