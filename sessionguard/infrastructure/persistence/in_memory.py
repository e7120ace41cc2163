"""In-memory persistence adapters.

Implements SessionRepository, UserRepository, and UnitOfWorkProtocol with
plain dictionaries. Suitable for tests and single-process deployments.

Architecture:
    - Rows are immutable snapshots; every read rebuilds fresh aggregates, so
      callers never share mutable state through the store
    - save() enforces the same constraints as the database schema
      (one active token per session, unique digests) and reports a
      DATABASE_CONFLICT failure instead of raising
    - An existing session is written only while stored as active (or already
      in the aggregate's status); terminal token rows keep their status
    - An asyncio.Lock serializes writes within one event loop

Usage:
    >>> clock = SystemClock()
    >>> sessions = InMemorySessionRepository(clock=clock)
    >>> uow = InMemoryUnitOfWork(sessions)
    >>> async with uow.atomic():
    ...     await sessions.save(session)
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias
from uuid import UUID

from sessionguard.core.enums import ErrorCode
from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.entities import RefreshToken, Session, User
from sessionguard.domain.enums import (
    RefreshTokenStatus,
    SessionEndReason,
    SessionStatus,
)
from sessionguard.domain.protocols.clock_protocol import ClockProtocol
from sessionguard.domain.value_objects import Digest
from sessionguard.infrastructure.enums import InfrastructureErrorCode
from sessionguard.infrastructure.errors import DatabaseError


@dataclass(frozen=True, slots=True)
class _SessionRow:
    id: UUID
    user_id: UUID
    client_id: str
    status: SessionStatus
    expires_at: datetime
    last_used_at: datetime
    ip: str | None
    user_agent: str | None
    ended_at: datetime | None
    end_reason: SessionEndReason | None


@dataclass(frozen=True, slots=True)
class _TokenRow:
    id: UUID
    session_id: UUID
    user_id: UUID
    digest: Digest
    status: RefreshTokenStatus
    issued_at: datetime
    expires_at: datetime
    last_used_at: datetime
    ip: str | None
    user_agent: str | None
    previous_token_id: UUID | None


_Snapshot: TypeAlias = tuple[dict[UUID, _SessionRow], dict[UUID, _TokenRow]]


class InMemorySessionRepository:
    """Dictionary-backed SessionRepository.

    Thread Safety:
        NOT thread-safe. Safe across tasks of a single event loop.
    """

    def __init__(self, clock: ClockProtocol) -> None:
        self._clock = clock
        self._sessions: dict[UUID, _SessionRow] = {}
        self._tokens: dict[UUID, _TokenRow] = {}
        self._lock = asyncio.Lock()

    async def find_active_by_user_id(self, user_id: UUID) -> list[Session]:
        now = self._clock.now()
        rows = sorted(
            (
                row
                for row in self._sessions.values()
                if row.user_id == user_id
                and row.status == SessionStatus.ACTIVE
                and row.expires_at > now
            ),
            key=lambda row: row.id,
            reverse=True,
        )
        return [
            self._hydrate(
                row,
                [
                    token
                    for token in self._tokens.values()
                    if token.session_id == row.id
                    and token.status == RefreshTokenStatus.ACTIVE
                ],
            )
            for row in rows
        ]

    async def find_session_for_refresh(self, digest: Digest) -> Session | None:
        presented = next(
            (token for token in self._tokens.values() if token.digest == digest),
            None,
        )
        if presented is None:
            return None

        row = self._sessions.get(presented.session_id)
        if row is None:
            return None

        tokens = [
            token
            for token in self._tokens.values()
            if token.session_id == row.id
            and (token.id == presented.id or token.status == RefreshTokenStatus.ACTIVE)
        ]
        return self._hydrate(row, tokens)

    async def save(self, session: Session) -> Result[None, DatabaseError]:
        """Store the aggregate, rejecting writes that break storage constraints.

        Returns:
            Success(None), or Failure(DatabaseError) with DATABASE_CONFLICT when
            the stored session already left the active status, the session
            would hold two active tokens, or a digest is reused.
        """
        async with self._lock:
            staged_tokens = dict(self._tokens)
            for token in session.tokens:
                stored = staged_tokens.get(token.id)
                if stored is not None and stored.status not in (
                    RefreshTokenStatus.ACTIVE,
                    token.status,
                ):
                    continue
                staged_tokens[token.id] = self._token_row(token)

            conflict = self._find_session_conflict(session) or self._find_conflict(
                staged_tokens, session.id
            )
            if conflict is not None:
                return Failure(
                    error=DatabaseError(
                        code=ErrorCode.RESOURCE_CONFLICT,
                        message="Session was modified concurrently",
                        infrastructure_code=InfrastructureErrorCode.DATABASE_CONFLICT,
                        details={"session_id": str(session.id), "constraint": conflict},
                    )
                )

            self._sessions[session.id] = self._session_row(session)
            self._tokens = staged_tokens

        session.mark_persisted()
        return Success(value=None)

    def snapshot(self) -> _Snapshot:
        """Copy of the current rows, for rollback."""
        return dict(self._sessions), dict(self._tokens)

    def restore(self, snapshot: _Snapshot) -> None:
        """Replace the current rows with a snapshot taken earlier."""
        self._sessions, self._tokens = dict(snapshot[0]), dict(snapshot[1])

    def _find_session_conflict(self, session: Session) -> str | None:
        stored = self._sessions.get(session.id)
        if session.is_new:
            return "session_primary_key" if stored is not None else None
        if stored is None or stored.status not in (
            SessionStatus.ACTIVE,
            session.status,
        ):
            return "session_not_active"
        return None

    @staticmethod
    def _find_conflict(tokens: dict[UUID, _TokenRow], session_id: UUID) -> str | None:
        active = [
            token
            for token in tokens.values()
            if token.session_id == session_id
            and token.status == RefreshTokenStatus.ACTIVE
        ]
        if len(active) > 1:
            return "one_active_token_per_session"

        seen: set[Digest] = set()
        for token in tokens.values():
            if token.digest in seen:
                return "unique_digest"
            seen.add(token.digest)
        return None

    # Mappers

    @staticmethod
    def _session_row(session: Session) -> _SessionRow:
        return _SessionRow(
            id=session.id,
            user_id=session.user_id,
            client_id=session.client_id,
            status=session.status,
            expires_at=session.expires_at,
            last_used_at=session.last_used_at,
            ip=session.ip,
            user_agent=session.user_agent,
            ended_at=session.ended_at,
            end_reason=session.end_reason,
        )

    @staticmethod
    def _token_row(token: RefreshToken) -> _TokenRow:
        return _TokenRow(
            id=token.id,
            session_id=token.session_id,
            user_id=token.user_id,
            digest=token.digest,
            status=token.status,
            issued_at=token.issued_at,
            expires_at=token.expires_at,
            last_used_at=token.last_used_at,
            ip=token.ip,
            user_agent=token.user_agent,
            previous_token_id=token.previous_token_id,
        )

    @staticmethod
    def _hydrate(row: _SessionRow, tokens: list[_TokenRow]) -> Session:
        return Session.hydrate(
            id=row.id,
            user_id=row.user_id,
            client_id=row.client_id,
            status=row.status,
            expires_at=row.expires_at,
            last_used_at=row.last_used_at,
            ip=row.ip,
            user_agent=row.user_agent,
            ended_at=row.ended_at,
            end_reason=row.end_reason,
            tokens=[
                RefreshToken.hydrate(
                    id=token.id,
                    session_id=token.session_id,
                    user_id=token.user_id,
                    digest=token.digest,
                    status=token.status,
                    issued_at=token.issued_at,
                    expires_at=token.expires_at,
                    last_used_at=token.last_used_at,
                    ip=token.ip,
                    user_agent=token.user_agent,
                    previous_token_id=token.previous_token_id,
                )
                for token in tokens
            ],
        )


class InMemoryUserRepository:
    """Dictionary-backed UserRepository keyed by lowercase email."""

    def __init__(self, users: list[User] | None = None) -> None:
        self._users: dict[str, User] = {}
        for user in users or []:
            self.add_user(user)

    def add_user(self, user: User) -> None:
        self._users[user.email.lower()] = user

    async def find_by_email(self, email: str) -> User | None:
        return self._users.get(email.lower())


class InMemoryUnitOfWork:
    """Atomic scope over an InMemorySessionRepository.

    Restores the repository's rows when the block raises.
    """

    def __init__(self, repository: InMemorySessionRepository) -> None:
        self._repository = repository

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        snapshot = self._repository.snapshot()
        try:
            yield
        except Exception:
            self._repository.restore(snapshot)
            raise
