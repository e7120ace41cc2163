"""RefreshToken domain entity.

Pure business logic, no framework dependencies.

A refresh token is one link in a session's rotation chain. It stores the
digest of the secret handed to the client, never the secret itself.

Status lifecycle:
    ACTIVE -> ROTATED | REVOKED | EXPIRED | REUSE_DETECTED

Only the owning Session calls the mark_* transitions; the status has no
public setter.
"""

from datetime import datetime, timedelta
from uuid import UUID

from sessionguard.domain.entities.entity_identity import EntityIdentity
from sessionguard.domain.enums import RefreshTokenStatus
from sessionguard.domain.value_objects import Digest


class RefreshToken:
    """Refresh token owned by a Session aggregate.

    Use RefreshToken.fresh() to issue a new token and RefreshToken.hydrate()
    to rebuild one from storage.

    Example:
        >>> token = RefreshToken.fresh(
        ...     session_id=session_id,
        ...     user_id=user_id,
        ...     digest=digester.digest(secret),
        ...     now=now,
        ...     ttl_seconds=3600,
        ... )
        >>> token.is_active()
        True
        >>> token.mark_rotated(now)
        >>> token.status
        <RefreshTokenStatus.ROTATED: 'rotated'>
    """

    __slots__ = (
        "_identity",
        "_session_id",
        "_user_id",
        "_digest",
        "_status",
        "_issued_at",
        "_expires_at",
        "_last_used_at",
        "_ip",
        "_user_agent",
        "_previous_token_id",
    )

    def __init__(
        self,
        *,
        identity: EntityIdentity,
        session_id: UUID,
        user_id: UUID,
        digest: Digest,
        status: RefreshTokenStatus,
        issued_at: datetime,
        expires_at: datetime,
        last_used_at: datetime,
        ip: str | None = None,
        user_agent: str | None = None,
        previous_token_id: UUID | None = None,
    ) -> None:
        self._identity = identity
        self._session_id = session_id
        self._user_id = user_id
        self._digest = digest
        self._status = status
        self._issued_at = issued_at
        self._expires_at = expires_at
        self._last_used_at = last_used_at
        self._ip = ip
        self._user_agent = user_agent
        self._previous_token_id = previous_token_id

    @classmethod
    def fresh(
        cls,
        *,
        session_id: UUID,
        user_id: UUID,
        digest: Digest,
        now: datetime,
        ttl_seconds: int,
        ip: str | None = None,
        user_agent: str | None = None,
        previous_token_id: UUID | None = None,
    ) -> "RefreshToken":
        """Issue a new active token expiring ttl_seconds after now.

        Args:
            session_id: Owning session.
            user_id: Owning user.
            digest: Digest of the secret handed to the client.
            now: Issue time.
            ttl_seconds: Lifetime in whole seconds.
            ip: Client IP, if known.
            user_agent: Client user agent, if known.
            previous_token_id: Token this one replaces in the rotation chain.

        Returns:
            RefreshToken: New token in ACTIVE status.

        Raises:
            ValueError: If ttl_seconds is negative.
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        return cls(
            identity=EntityIdentity(),
            session_id=session_id,
            user_id=user_id,
            digest=digest,
            status=RefreshTokenStatus.ACTIVE,
            issued_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
            last_used_at=now,
            ip=ip,
            user_agent=user_agent,
            previous_token_id=previous_token_id,
        )

    @classmethod
    def hydrate(
        cls,
        *,
        id: UUID,
        session_id: UUID,
        user_id: UUID,
        digest: Digest,
        status: RefreshTokenStatus,
        issued_at: datetime,
        expires_at: datetime,
        last_used_at: datetime,
        ip: str | None = None,
        user_agent: str | None = None,
        previous_token_id: UUID | None = None,
    ) -> "RefreshToken":
        """Rebuild a stored token as-is (expiry is not re-derived)."""
        return cls(
            identity=EntityIdentity.existing(id),
            session_id=session_id,
            user_id=user_id,
            digest=digest,
            status=status,
            issued_at=issued_at,
            expires_at=expires_at,
            last_used_at=last_used_at,
            ip=ip,
            user_agent=user_agent,
            previous_token_id=previous_token_id,
        )

    # Read-only accessors

    @property
    def id(self) -> UUID:
        return self._identity.id

    @property
    def is_new(self) -> bool:
        return self._identity.is_new

    @property
    def session_id(self) -> UUID:
        return self._session_id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def digest(self) -> Digest:
        return self._digest

    @property
    def status(self) -> RefreshTokenStatus:
        return self._status

    @property
    def issued_at(self) -> datetime:
        return self._issued_at

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
    def previous_token_id(self) -> UUID | None:
        return self._previous_token_id

    # Status transitions (one-way; last writer wins)

    def is_active(self) -> bool:
        """Check whether this is the session's current token."""
        return self._status == RefreshTokenStatus.ACTIVE

    def mark_rotated(self, now: datetime) -> None:
        """Retire the token after a successful rotation.

        Args:
            now: Rotation time, recorded as last use.
        """
        self._status = RefreshTokenStatus.ROTATED
        self._last_used_at = now

    def mark_revoked(self) -> None:
        self._status = RefreshTokenStatus.REVOKED

    def mark_reused(self) -> None:
        self._status = RefreshTokenStatus.REUSE_DETECTED

    def mark_expired(self) -> None:
        self._status = RefreshTokenStatus.EXPIRED

    def mark_persisted(self) -> None:
        """Called by repositories after the token row is stored."""
        self._identity.mark_persisted()

    def __repr__(self) -> str:
        return (
            f"<RefreshToken("
            f"id={self.id}, "
            f"session_id={self._session_id}, "
            f"status={self._status.value}"
            f")>"
        )
