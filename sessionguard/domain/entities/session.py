"""Session aggregate root and refresh token rotation state machine.

Pure business logic, no framework dependencies.

A Session owns its chain of refresh tokens and is the only writer of their
status. Every refresh presents the current secret, which is exchanged for a
new one (rotation). Presenting any other secret for a live session is treated
as theft and kills the session.

Invariants:
    - At most one owned token is ACTIVE at any time.
    - While the session is ACTIVE, exactly one owned token is ACTIVE.
    - Once the status leaves ACTIVE it is terminal.
    - Sessions are never deleted, only ended.

Rotation (rotate_token) evaluates, in order:
    1. Session not active        -> SessionNotActiveError
    2. No active token           -> revoke("no_active_token"), NoActiveRefreshTokenError
    3. now >= expires_at         -> status EXPIRED, token REVOKED, SessionExpiredError
    4. Secret does not verify    -> status REUSE_DETECTED, token REUSE_DETECTED,
                                    RefreshTokenReuseDetectedError
    5. Otherwise                 -> old token ROTATED, new ACTIVE token appended
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID

from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.entities.entity_identity import EntityIdentity
from sessionguard.domain.entities.refresh_token import RefreshToken
from sessionguard.domain.enums import SessionEndReason, SessionStatus
from sessionguard.domain.errors import (
    NoActiveRefreshTokenError,
    RefreshTokenReuseDetectedError,
    SessionError,
    SessionExpiredError,
    SessionNotActiveError,
)
from sessionguard.domain.value_objects import Digest

if TYPE_CHECKING:
    from sessionguard.domain.protocols.token_digester_protocol import (
        TokenDigesterProtocol,
    )


class Session:
    """Authenticated session for one user on one client.

    Attributes (read-only):
        id: Session identifier (UUIDv7).
        user_id: Owning user.
        client_id: Client (device) identifier from the fingerprint.
        status: Lifecycle status.
        expires_at: Absolute expiry. Rotation never extends it.
        last_used_at: Last successful use.
        ip: Client IP at login.
        user_agent: Client user agent at login.
        ended_at: When the session left ACTIVE.
        end_reason: Why the session left ACTIVE.
        tokens: Owned refresh tokens loaded in this aggregate.

    Example:
        >>> session = Session.start(
        ...     user_id=user_id,
        ...     client_id="desktop",
        ...     now=now,
        ...     ttl_seconds=30 * 24 * 3600,
        ...     digest=digester.digest(secret),
        ... )
        >>> result = session.rotate_token(secret, new_digest, digester, later)
        >>> isinstance(result, Success)
        True
    """

    __slots__ = (
        "_identity",
        "_user_id",
        "_client_id",
        "_status",
        "_expires_at",
        "_last_used_at",
        "_ip",
        "_user_agent",
        "_ended_at",
        "_end_reason",
        "_tokens",
    )

    def __init__(
        self,
        *,
        identity: EntityIdentity,
        user_id: UUID,
        client_id: str,
        status: SessionStatus,
        expires_at: datetime,
        last_used_at: datetime,
        tokens: list[RefreshToken],
        ip: str | None = None,
        user_agent: str | None = None,
        ended_at: datetime | None = None,
        end_reason: SessionEndReason | None = None,
    ) -> None:
        self._identity = identity
        self._user_id = user_id
        self._client_id = client_id
        self._status = status
        self._expires_at = expires_at
        self._last_used_at = last_used_at
        self._ip = ip
        self._user_agent = user_agent
        self._ended_at = ended_at
        self._end_reason = end_reason
        self._tokens = list(tokens)

    @classmethod
    def start(
        cls,
        *,
        user_id: UUID,
        client_id: str,
        now: datetime,
        ttl_seconds: int,
        digest: Digest,
        ip: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        """Open a new session holding one fresh active token.

        The session and its first token share the same expiry.

        Args:
            user_id: Authenticated user.
            client_id: Client identifier from the fingerprint.
            now: Login time.
            ttl_seconds: Session lifetime in whole seconds.
            digest: Digest of the secret handed to the client.
            ip: Client IP, if known.
            user_agent: Client user agent, if known.

        Returns:
            Session: New ACTIVE session (not yet persisted).

        Raises:
            ValueError: If ttl_seconds is not positive.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        identity = EntityIdentity()
        token = RefreshToken.fresh(
            session_id=identity.id,
            user_id=user_id,
            digest=digest,
            now=now,
            ttl_seconds=ttl_seconds,
            ip=ip,
            user_agent=user_agent,
        )
        return cls(
            identity=identity,
            user_id=user_id,
            client_id=client_id,
            status=SessionStatus.ACTIVE,
            expires_at=now + timedelta(seconds=ttl_seconds),
            last_used_at=now,
            tokens=[token],
            ip=ip,
            user_agent=user_agent,
        )

    @classmethod
    def hydrate(
        cls,
        *,
        id: UUID,
        user_id: UUID,
        client_id: str,
        status: SessionStatus,
        expires_at: datetime,
        last_used_at: datetime,
        tokens: list[RefreshToken],
        ip: str | None = None,
        user_agent: str | None = None,
        ended_at: datetime | None = None,
        end_reason: SessionEndReason | None = None,
    ) -> Session:
        """Rebuild a stored session with whichever tokens were loaded."""
        return cls(
            identity=EntityIdentity.existing(id),
            user_id=user_id,
            client_id=client_id,
            status=status,
            expires_at=expires_at,
            last_used_at=last_used_at,
            tokens=tokens,
            ip=ip,
            user_agent=user_agent,
            ended_at=ended_at,
            end_reason=end_reason,
        )

    # Read-only accessors

    @property
    def id(self) -> UUID:
        return self._identity.id

    @property
    def is_new(self) -> bool:
        return self._identity.is_new

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @property
    def last_used_at(self) -> datetime:
        return self._last_used_at

    @property
    def ip(self) -> str | None:
        return self._ip

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    @property
    def ended_at(self) -> datetime | None:
        return self._ended_at

    @property
    def end_reason(self) -> SessionEndReason | None:
        return self._end_reason

    @property
    def tokens(self) -> tuple[RefreshToken, ...]:
        return tuple(self._tokens)

    @property
    def active_token(self) -> RefreshToken | None:
        """The current token, or None if no loaded token is active."""
        return next((token for token in self._tokens if token.is_active()), None)

    # Behaviour

    def is_active(self) -> bool:
        return self._status == SessionStatus.ACTIVE

    def touch(self, now: datetime) -> None:
        """Record activity without changing status or tokens."""
        self._last_used_at = now

    def revoke(self, now: datetime, reason: SessionEndReason) -> None:
        """End the session.

        No-op once the session is no longer active, so the first end time and
        reason are kept.

        Args:
            now: End time.
            reason: Why the session ended.
        """
        if not self.is_active():
            return
        self._end(SessionStatus.REVOKED, now, reason)

    def has_active_refresh_token(
        self, presented_secret: bytes, digester: TokenDigesterProtocol
    ) -> bool:
        """Check whether the secret is this session's current one.

        Non-mutating. Used by login and logout to match a client to its session.

        Args:
            presented_secret: Raw secret from the client.
            digester: Digester used to verify against the stored digest.

        Returns:
            True only if the session is active, has an active token, and the
            secret verifies against that token's digest.
        """
        if not self.is_active():
            return False
        token = self.active_token
        if token is None:
            return False
        return digester.verify(presented_secret, token.digest)

    def rotate_token(
        self,
        presented_secret: bytes,
        new_digest: Digest,
        digester: TokenDigesterProtocol,
        now: datetime,
    ) -> Result[RefreshToken, SessionError]:
        """Exchange the current secret for a new one.

        Failures other than "not active" end the session; the caller must
        persist the aggregate either way so the terminal status is durable.

        Args:
            presented_secret: Raw secret from the client.
            new_digest: Digest of the replacement secret.
            digester: Digester used to verify the presented secret.
            now: Rotation time.

        Returns:
            Success(new_token) after rotation, or Failure(SessionError).
        """
        if not self.is_active():
            return Failure(error=SessionNotActiveError(session_id=self.id))

        current = self.active_token
        if current is None:
            self.revoke(now, SessionEndReason.NO_ACTIVE_TOKEN)
            return Failure(error=NoActiveRefreshTokenError(session_id=self.id))

        if now >= self._expires_at:
            self._end(SessionStatus.EXPIRED, now, SessionEndReason.EXPIRED)
            current.mark_revoked()
            return Failure(error=SessionExpiredError(session_id=self.id))

        if not digester.verify(presented_secret, current.digest):
            self._end(
                SessionStatus.REUSE_DETECTED,
                now,
                SessionEndReason.TOKEN_REUSE_DETECTED,
            )
            current.mark_reused()
            return Failure(error=RefreshTokenReuseDetectedError(session_id=self.id))

        remaining = int((self._expires_at - now).total_seconds())
        replacement = RefreshToken.fresh(
            session_id=self.id,
            user_id=self._user_id,
            digest=new_digest,
            now=now,
            ttl_seconds=remaining,
            ip=self._ip,
            user_agent=self._user_agent,
            previous_token_id=current.id,
        )
        current.mark_rotated(now)
        self._tokens.append(replacement)
        self._last_used_at = now
        return Success(value=replacement)

    def mark_persisted(self) -> None:
        """Called by repositories once the session and its tokens are stored."""
        self._identity.mark_persisted()
        for token in self._tokens:
            token.mark_persisted()

    def _end(
        self, status: SessionStatus, now: datetime, reason: SessionEndReason
    ) -> None:
        self._status = status
        self._ended_at = now
        self._end_reason = reason

    def __repr__(self) -> str:
        return (
            f"<Session("
            f"id={self.id}, "
            f"user_id={self._user_id}, "
            f"client_id={self._client_id!r}, "
            f"status={self._status.value}"
            f")>"
        )
