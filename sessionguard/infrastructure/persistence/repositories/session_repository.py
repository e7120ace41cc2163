"""SessionRepository - SQLAlchemy implementation of the SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between the Session aggregate (with its refresh tokens) and the
sessions / refresh_tokens tables.

Concurrency:
    save() runs in a SAVEPOINT. Token status updates are flushed before new
    tokens are inserted, so a legitimate rotation never trips the
    one-active-token index while a concurrent rotation of the same token
    does. IntegrityError becomes a DATABASE_CONFLICT failure.

    Existing session rows are updated only while stored as active (or
    already in the aggregate's status), so an aggregate loaded before a
    concurrent logout or reuse detection cannot bring the session back.
    Terminal token rows are never overwritten with a different status.
"""

from collections import defaultdict
from typing import Any, cast
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sessionguard.core.enums import ErrorCode
from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.entities import RefreshToken, Session
from sessionguard.domain.enums import RefreshTokenStatus, SessionEndReason, SessionStatus
from sessionguard.domain.protocols.clock_protocol import ClockProtocol
from sessionguard.domain.value_objects import Digest
from sessionguard.infrastructure.enums import InfrastructureErrorCode
from sessionguard.infrastructure.errors import DatabaseError
from sessionguard.infrastructure.persistence.models import (
    RefreshTokenModel,
    SessionModel,
)


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session, clock=SystemClock())
        ...     sessions = await repo.find_active_by_user_id(user_id)
    """

    def __init__(self, session: AsyncSession, clock: ClockProtocol) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
            clock: Time source for excluding expired sessions.
        """
        self._session = session
        self._clock = clock

    async def find_active_by_user_id(self, user_id: UUID) -> list[Session]:
        """Find a user's live sessions, each with its active token.

        Args:
            user_id: Owning user.

        Returns:
            Active, unexpired sessions ordered newest first.
        """
        now = self._clock.now()
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.user_id == user_id,
                SessionModel.status == SessionStatus.ACTIVE.value,
                SessionModel.expires_at > now,
            )
            .order_by(SessionModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        session_models = result.scalars().all()
        if not session_models:
            return []

        token_stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.session_id.in_([model.id for model in session_models]),
            RefreshTokenModel.status == RefreshTokenStatus.ACTIVE.value,
        )
        token_result = await self._session.execute(token_stmt)

        tokens_by_session: dict[UUID, list[RefreshToken]] = defaultdict(list)
        for token_model in token_result.scalars().all():
            tokens_by_session[token_model.session_id].append(
                self._token_to_domain(token_model)
            )

        return [
            self._session_to_domain(model, tokens_by_session[model.id])
            for model in session_models
        ]

    async def find_session_for_refresh(self, digest: Digest) -> Session | None:
        """Find the session owning the token with this digest.

        Loads the presented token plus the session's current active token.

        Args:
            digest: Digest of the presented refresh secret.

        Returns:
            Session if the digest is known, None otherwise.
        """
        presented_stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.digest == digest.value
        )
        presented = (await self._session.execute(presented_stmt)).scalar_one_or_none()
        if presented is None:
            return None

        session_model = await self._session.get(SessionModel, presented.session_id)
        if session_model is None:
            return None

        token_stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.session_id == session_model.id,
            or_(
                RefreshTokenModel.id == presented.id,
                RefreshTokenModel.status == RefreshTokenStatus.ACTIVE.value,
            ),
        )
        token_models = (await self._session.execute(token_stmt)).scalars().all()

        return self._session_to_domain(
            session_model, [self._token_to_domain(model) for model in token_models]
        )

    async def save(self, session: Session) -> Result[None, DatabaseError]:
        """Upsert the session row and every loaded token row atomically.

        Args:
            session: Aggregate to store.

        Returns:
            Success(None), or Failure(DatabaseError) with DATABASE_CONFLICT on
            a constraint violation or when the stored session already left
            the active status, and DATABASE_ERROR on other failures.

        Note:
            The aggregate is marked persisted when the savepoint is released,
            before the enclosing unit of work commits. If that commit fails
            the exception propagates and the aggregate must be discarded; a
            later save of it finds no row and returns DATABASE_CONFLICT.
        """
        try:
            async with self._session.begin_nested():
                if not await self._upsert_session_row(session):
                    return Failure(
                        error=DatabaseError(
                            code=ErrorCode.RESOURCE_CONFLICT,
                            message="Session is no longer active",
                            infrastructure_code=InfrastructureErrorCode.DATABASE_CONFLICT,
                            details={
                                "session_id": str(session.id),
                                "constraint": "session_not_active",
                            },
                        )
                    )

                for token in session.tokens:
                    if not token.is_new:
                        await self._update_token_row(token)
                await self._session.flush()

                for token in session.tokens:
                    if token.is_new:
                        self._session.add(self._token_to_model(token))
                await self._session.flush()
        except IntegrityError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.RESOURCE_CONFLICT,
                    message="Session was modified concurrently",
                    infrastructure_code=InfrastructureErrorCode.DATABASE_CONFLICT,
                    details={"session_id": str(session.id), "error": str(e.orig)},
                )
            )
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.PERSISTENCE_FAILED,
                    message="Failed to save session",
                    infrastructure_code=InfrastructureErrorCode.DATABASE_ERROR,
                    details={"session_id": str(session.id), "error": str(e)},
                )
            )

        session.mark_persisted()
        return Success(value=None)

    async def _upsert_session_row(self, session: Session) -> bool:
        """Insert a new row or conditionally update an existing one.

        Returns:
            False when the stored row is missing or already ended with a
            different status.
        """
        if session.is_new:
            self._session.add(self._session_to_model(session))
            await self._session.flush()
            return True

        result = await self._session.execute(
            update(SessionModel)
            .where(
                SessionModel.id == session.id,
                SessionModel.status.in_(
                    [SessionStatus.ACTIVE.value, session.status.value]
                ),
            )
            .values(
                status=session.status.value,
                last_used_at=session.last_used_at,
                ended_at=session.ended_at,
                end_reason=session.end_reason.value if session.end_reason else None,
            )
        )
        return (cast(Any, result).rowcount or 0) > 0

    async def _update_token_row(self, token: RefreshToken) -> None:
        await self._session.execute(
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id == token.id,
                RefreshTokenModel.status.in_(
                    [RefreshTokenStatus.ACTIVE.value, token.status.value]
                ),
            )
            .values(status=token.status.value, last_used_at=token.last_used_at)
        )

    # Mappers

    def _session_to_domain(
        self, model: SessionModel, tokens: list[RefreshToken]
    ) -> Session:
        return Session.hydrate(
            id=model.id,
            user_id=model.user_id,
            client_id=model.client_id,
            status=SessionStatus(model.status),
            expires_at=model.expires_at,
            last_used_at=model.last_used_at,
            tokens=tokens,
            ip=model.ip,
            user_agent=model.user_agent,
            ended_at=model.ended_at,
            end_reason=SessionEndReason(model.end_reason) if model.end_reason else None,
        )

    def _session_to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            client_id=session.client_id,
            status=session.status.value,
            expires_at=session.expires_at,
            last_used_at=session.last_used_at,
            ip=session.ip,
            user_agent=session.user_agent,
            ended_at=session.ended_at,
            end_reason=session.end_reason.value if session.end_reason else None,
        )

    def _token_to_domain(self, model: RefreshTokenModel) -> RefreshToken:
        return RefreshToken.hydrate(
            id=model.id,
            session_id=model.session_id,
            user_id=model.user_id,
            digest=Digest(value=model.digest, algorithm=model.digest_algorithm),
            status=RefreshTokenStatus(model.status),
            issued_at=model.issued_at,
            expires_at=model.expires_at,
            last_used_at=model.last_used_at,
            ip=model.ip,
            user_agent=model.user_agent,
            previous_token_id=model.previous_token_id,
        )

    def _token_to_model(self, token: RefreshToken) -> RefreshTokenModel:
        return RefreshTokenModel(
            id=token.id,
            session_id=token.session_id,
            user_id=token.user_id,
            digest=token.digest.value,
            digest_algorithm=token.digest.algorithm,
            status=token.status.value,
            issued_at=token.issued_at,
            expires_at=token.expires_at,
            last_used_at=token.last_used_at,
            ip=token.ip,
            user_agent=token.user_agent,
            previous_token_id=token.previous_token_id,
        )
