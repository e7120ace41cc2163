"""Login User handler.

Flow:
1. Look up user by email and verify password
2. If the client presented a refresh secret that matches a live session on
   the same client, reuse that session (no write) and echo the secret
3. Otherwise generate a new secret, start a session, persist it atomically
4. Issue an access token (only after the atomic scope committed)
5. Return Success(LoginResult)

Unknown email and wrong password return the same InvalidCredentialsError.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, errors)
- NO infrastructure imports (adapters are injected via protocols)
"""

from sessionguard.application.commands.auth_commands import LoginUser
from sessionguard.application.dtos import LoginResult
from sessionguard.application.services import find_client_session
from sessionguard.core.errors import DomainError
from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.entities import Session
from sessionguard.domain.errors import InvalidCredentialsError
from sessionguard.domain.protocols import (
    AccessTokenProtocol,
    ClockProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    RefreshSecretGeneratorProtocol,
    SessionRepository,
    TokenDigesterProtocol,
    UnitOfWorkProtocol,
    UserRepository,
)


class LoginUserHandler:
    """Handler for login user command.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (Session aggregate, protocols)
    - Infrastructure layer (repositories, services via dependency injection)
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        password_service: PasswordHashingProtocol,
        token_digester: TokenDigesterProtocol,
        secret_generator: RefreshSecretGeneratorProtocol,
        access_token_service: AccessTokenProtocol,
        unit_of_work: UnitOfWorkProtocol,
        clock: ClockProtocol,
        logger: LoggerProtocol,
        session_ttl_seconds: int,
        secret_length: int = 16,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User lookup.
            session_repo: Session aggregate persistence.
            password_service: Password verification.
            token_digester: Keyed digest of refresh secrets.
            secret_generator: Source of new refresh secrets.
            access_token_service: JWT issuer.
            unit_of_work: Atomic scope around the session write.
            clock: Time source.
            logger: Structured logger.
            session_ttl_seconds: Lifetime of new sessions.
            secret_length: Length in bytes of new refresh secrets.
        """
        self._user_repo = user_repo
        self._session_repo = session_repo
        self._password_service = password_service
        self._token_digester = token_digester
        self._secret_generator = secret_generator
        self._access_token_service = access_token_service
        self._unit_of_work = unit_of_work
        self._clock = clock
        self._logger = logger
        self._session_ttl_seconds = session_ttl_seconds
        self._secret_length = secret_length

    async def handle(self, cmd: LoginUser) -> Result[LoginResult, DomainError]:
        """Handle login user command.

        Args:
            cmd: LoginUser command.

        Returns:
            Success(LoginResult) on successful login.
            Failure(InvalidCredentialsError) on bad email or password.
            Failure(DomainError) if the new session could not be stored.
        """
        client_id = cmd.fingerprint.client_id

        user = await self._user_repo.find_by_email(cmd.email)
        if user is None or not self._password_service.verify_password(
            cmd.password, user.password_hash
        ):
            self._logger.info("login_failed", client_id=client_id)
            return Failure(error=InvalidCredentialsError())

        if cmd.refresh_secret is not None:
            existing = await find_client_session(
                self._session_repo,
                user.id,
                client_id,
                cmd.refresh_secret,
                self._token_digester,
            )
            if existing is not None:
                self._logger.info(
                    "login_reused_session",
                    user_id=str(user.id),
                    session_id=str(existing.id),
                    client_id=client_id,
                )
                return Success(
                    value=LoginResult(
                        access_token=self._access_token_service.issue(user.id),
                        refresh_secret=cmd.refresh_secret,
                        expires_at=existing.expires_at,
                    )
                )

        refresh_secret = self._secret_generator.generate(self._secret_length)
        session = Session.start(
            user_id=user.id,
            client_id=client_id,
            now=self._clock.now(),
            ttl_seconds=self._session_ttl_seconds,
            digest=self._token_digester.digest(refresh_secret.value),
            ip=cmd.fingerprint.ip,
            user_agent=cmd.fingerprint.user_agent,
        )

        async with self._unit_of_work.atomic():
            save_result = await self._session_repo.save(session)

        if isinstance(save_result, Failure):
            self._logger.error(
                "session_persist_failed",
                user_id=str(user.id),
                session_id=str(session.id),
                error_code=save_result.error.code.value,
            )
            return Failure(error=save_result.error)

        self._logger.info(
            "login_succeeded",
            user_id=str(user.id),
            session_id=str(session.id),
            client_id=client_id,
        )
        return Success(
            value=LoginResult(
                access_token=self._access_token_service.issue(user.id),
                refresh_secret=refresh_secret,
                expires_at=session.expires_at,
            )
        )
