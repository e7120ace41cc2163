"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console)
- Database (PostgreSQL)
- Refresh secret digests (HMAC)
- Access tokens (JWT)
- Password hashing (bcrypt)
- Refresh secret generation and the clock
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from sessionguard.core.config import settings
from sessionguard.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from sessionguard.domain.protocols import (
        AccessTokenProtocol,
        ClockProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        RefreshSecretGeneratorProtocol,
        TokenDigesterProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from sessionguard.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_token_digester() -> "TokenDigesterProtocol":
    """Get refresh secret digester singleton (app-scoped).

    Keyed with REFRESH_TOKEN_SECRET. Construction fails fast on an
    unsupported digest algorithm.
    """
    from sessionguard.infrastructure.security import HmacTokenDigester

    return HmacTokenDigester(
        secret_key=settings.refresh_token_secret,
        algorithm=settings.refresh_token_digest_algorithm,
    )


@lru_cache()
def get_access_token_service() -> "AccessTokenProtocol":
    """Get JWT access token service singleton (app-scoped).

    Usage:
        # Presentation Layer (FastAPI Depends)
        tokens: AccessTokenProtocol = Depends(get_access_token_service)
    """
    from sessionguard.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        issuer=settings.access_token_issuer,
        audience=settings.access_token_audience,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped)."""
    from sessionguard.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_refresh_secret_generator() -> "RefreshSecretGeneratorProtocol":
    """Get refresh secret generator singleton (app-scoped)."""
    from sessionguard.infrastructure.security import SecretsRefreshSecretGenerator

    return SecretsRefreshSecretGenerator()


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get system clock singleton (app-scoped)."""
    from sessionguard.infrastructure.clock import SystemClock

    return SystemClock()


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Yields:
        Database session for request duration.

    Usage:
        @router.post("/sessions")
        async def create_session(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
