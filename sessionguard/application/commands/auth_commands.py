"""Session commands (CQRS write operations).

Commands represent user intent to change session state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
"""

from dataclasses import dataclass
from uuid import UUID

from sessionguard.application.dtos import ClientFingerprint
from sessionguard.domain.value_objects import RefreshSecret


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate with credentials and open (or reuse) a session.

    Attributes:
        email: Email address.
        password: Plain text password (never logged).
        fingerprint: Client the session is bound to.
        refresh_secret: Secret the client already holds, if any. When it
            matches a live session on the same client, that session is reused.

    Example:
        >>> command = LoginUser(
        ...     email="user@example.com",
        ...     password="correct horse",
        ...     fingerprint=ClientFingerprint(client_id="desktop"),
        ... )
        >>> result = await handler.handle(command)
    """

    email: str
    password: str
    fingerprint: ClientFingerprint
    refresh_secret: RefreshSecret | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutSession:
    """End the caller's session on this client.

    Attributes:
        user_id: Authenticated user (from the access token).
        fingerprint: Client the session is bound to.
        refresh_secret: Secret identifying the session. Without it the
            command is a no-op.
    """

    user_id: UUID
    fingerprint: ClientFingerprint
    refresh_secret: RefreshSecret | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """End every active session of a user ("logout everywhere")."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class RefreshSession:
    """Exchange the current refresh secret for a new one and an access token.

    Attributes:
        fingerprint: Client presenting the secret.
        refresh_secret: Secret from the refresh cookie.
    """

    fingerprint: ClientFingerprint
    refresh_secret: RefreshSecret
