"""Refresh Session handler (refresh token rotation).

Flow:
1. Digest the presented secret and load the session owning that digest
2. Unknown digest: InvalidSessionError("not found")
3. Session bound to another client: InvalidSessionError("other device"),
   nothing changes
4. Generate a new secret and rotate the session's token
5. Persist the aggregate whether rotation succeeded or not, so terminal
   statuses (expired, reuse detected) are durable
6. Issue an access token (only after the atomic scope committed)
7. Return Success(RefreshResult)

Presenting a secret that is no longer current kills the session
(reuse detection). A persistence failure is reported instead of the domain
failure when both happen.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, errors)
- NO infrastructure imports (adapters are injected via protocols)
"""

from sessionguard.application.commands.auth_commands import RefreshSession
from sessionguard.application.dtos import RefreshResult
from sessionguard.core.errors import DomainError
from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.errors import (
    InvalidSessionError,
    RefreshTokenReuseDetectedError,
)
from sessionguard.domain.protocols import (
    AccessTokenProtocol,
    ClockProtocol,
    LoggerProtocol,
    RefreshSecretGeneratorProtocol,
    SessionRepository,
    TokenDigesterProtocol,
    UnitOfWorkProtocol,
)


class RefreshSessionHandler:
    """Handler for refresh session command."""

    def __init__(
        self,
        session_repo: SessionRepository,
        token_digester: TokenDigesterProtocol,
        secret_generator: RefreshSecretGeneratorProtocol,
        access_token_service: AccessTokenProtocol,
        unit_of_work: UnitOfWorkProtocol,
        clock: ClockProtocol,
        logger: LoggerProtocol,
        secret_length: int = 16,
    ) -> None:
        """Initialize refresh handler with dependencies.

        Args:
            session_repo: Session aggregate persistence.
            token_digester: Keyed digest of refresh secrets.
            secret_generator: Source of replacement secrets.
            access_token_service: JWT issuer.
            unit_of_work: Atomic scope around the rotation write.
            clock: Time source.
            logger: Structured logger.
            secret_length: Length in bytes of replacement secrets.
        """
        self._session_repo = session_repo
        self._token_digester = token_digester
        self._secret_generator = secret_generator
        self._access_token_service = access_token_service
        self._unit_of_work = unit_of_work
        self._clock = clock
        self._logger = logger
        self._secret_length = secret_length

    async def handle(self, cmd: RefreshSession) -> Result[RefreshResult, DomainError]:
        """Handle refresh session command.

        Args:
            cmd: RefreshSession command.

        Returns:
            Success(RefreshResult) after rotation.
            Failure(SessionError) if the secret cannot be exchanged.
            Failure(DomainError) if the aggregate could not be stored.
        """
        client_id = cmd.fingerprint.client_id
        presented = cmd.refresh_secret.value

        session = await self._session_repo.find_session_for_refresh(
            self._token_digester.digest(presented)
        )
        if session is None:
            self._logger.info(
                "session_refresh_rejected", client_id=client_id, reason="not found"
            )
            return Failure(error=InvalidSessionError(cause="not found"))

        if session.client_id != client_id:
            self._logger.info(
                "session_refresh_rejected",
                session_id=str(session.id),
                client_id=client_id,
                reason="other device",
            )
            return Failure(
                error=InvalidSessionError(session_id=session.id, cause="other device")
            )

        new_secret = self._secret_generator.generate(self._secret_length)
        new_digest = self._token_digester.digest(new_secret.value)

        async with self._unit_of_work.atomic():
            rotation = session.rotate_token(
                presented, new_digest, self._token_digester, self._clock.now()
            )
            save_result = await self._session_repo.save(session)

        if isinstance(save_result, Failure):
            self._logger.error(
                "session_persist_failed",
                user_id=str(session.user_id),
                session_id=str(session.id),
                error_code=save_result.error.code.value,
            )
            return Failure(error=save_result.error)

        if isinstance(rotation, Failure):
            if isinstance(rotation.error, RefreshTokenReuseDetectedError):
                self._logger.warning(
                    "refresh_token_reuse_detected",
                    user_id=str(session.user_id),
                    session_id=str(session.id),
                    client_id=client_id,
                )
            else:
                self._logger.info(
                    "session_refresh_rejected",
                    session_id=str(session.id),
                    client_id=client_id,
                    reason=rotation.error.code.value,
                )
            return Failure(error=rotation.error)

        self._logger.info(
            "session_rotated",
            user_id=str(session.user_id),
            session_id=str(session.id),
        )
        return Success(
            value=RefreshResult(
                access_token=self._access_token_service.issue(session.user_id),
                refresh_secret=new_secret,
                expires_at=session.expires_at,
            )
        )
