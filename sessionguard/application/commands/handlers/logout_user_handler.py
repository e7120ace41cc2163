"""Logout handlers.

LogoutSessionHandler flow:
1. No refresh secret presented: succeed without reading anything
2. Find the user's live session on this client holding the secret
3. Revoke it ("user_logout") and persist atomically
4. No matching session: succeed silently

LogoutAllSessionsHandler flow:
1. Load every live session of the user
2. Revoke each ("global_logout") and persist each
3. Collect save failures into one AggregateError; successful revokes stay

Note: access tokens cannot be revoked and expire on their own. Logout only
stops new access tokens from being minted.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, errors)
- NO infrastructure imports (adapters are injected via protocols)
"""

from sessionguard.application.commands.auth_commands import (
    LogoutAllSessions,
    LogoutSession,
)
from sessionguard.application.services import find_client_session
from sessionguard.core.errors import AggregateError, DomainError
from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.enums import SessionEndReason
from sessionguard.domain.protocols import (
    ClockProtocol,
    LoggerProtocol,
    SessionRepository,
    TokenDigesterProtocol,
    UnitOfWorkProtocol,
)


class LogoutSessionHandler:
    """Handler for logout session command."""

    def __init__(
        self,
        session_repo: SessionRepository,
        token_digester: TokenDigesterProtocol,
        unit_of_work: UnitOfWorkProtocol,
        clock: ClockProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._token_digester = token_digester
        self._unit_of_work = unit_of_work
        self._clock = clock
        self._logger = logger

    async def handle(self, cmd: LogoutSession) -> Result[None, DomainError]:
        """Handle logout session command.

        Args:
            cmd: LogoutSession command.

        Returns:
            Success(None) whether or not a session was found.
            Failure(DomainError) if the revoked session could not be stored.
        """
        if cmd.refresh_secret is None:
            return Success(value=None)

        session = await find_client_session(
            self._session_repo,
            cmd.user_id,
            cmd.fingerprint.client_id,
            cmd.refresh_secret,
            self._token_digester,
        )
        if session is None:
            return Success(value=None)

        session.revoke(self._clock.now(), SessionEndReason.USER_LOGOUT)
        async with self._unit_of_work.atomic():
            save_result = await self._session_repo.save(session)

        if isinstance(save_result, Failure):
            self._logger.error(
                "session_persist_failed",
                user_id=str(cmd.user_id),
                session_id=str(session.id),
                error_code=save_result.error.code.value,
            )
            return Failure(error=save_result.error)

        self._logger.info(
            "session_logged_out",
            user_id=str(cmd.user_id),
            session_id=str(session.id),
        )
        return Success(value=None)


class LogoutAllSessionsHandler:
    """Handler for logout all sessions command ("logout everywhere").

    Returns the number of sessions revoked.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        unit_of_work: UnitOfWorkProtocol,
        clock: ClockProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_repo = session_repo
        self._unit_of_work = unit_of_work
        self._clock = clock
        self._logger = logger

    async def handle(self, cmd: LogoutAllSessions) -> Result[int, DomainError]:
        """Handle logout all sessions command.

        Args:
            cmd: LogoutAllSessions command.

        Returns:
            Success(revoked_count), or Failure(AggregateError) listing every
            save that failed. Sessions saved before or after a failure stay
            revoked.
        """
        now = self._clock.now()
        errors: list[DomainError] = []
        revoked = 0

        async with self._unit_of_work.atomic():
            sessions = await self._session_repo.find_active_by_user_id(cmd.user_id)
            for session in sessions:
                session.revoke(now, SessionEndReason.GLOBAL_LOGOUT)
                save_result = await self._session_repo.save(session)
                if isinstance(save_result, Failure):
                    self._logger.error(
                        "session_persist_failed",
                        user_id=str(cmd.user_id),
                        session_id=str(session.id),
                        error_code=save_result.error.code.value,
                    )
                    errors.append(save_result.error)
                else:
                    revoked += 1

        self._logger.info(
            "sessions_logged_out",
            user_id=str(cmd.user_id),
            revoked=revoked,
            failed=len(errors),
        )
        if errors:
            return Failure(error=AggregateError(errors=tuple(errors)))
        return Success(value=revoked)
