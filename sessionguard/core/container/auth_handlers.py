"""Authentication handler dependency factories.

Request-scoped handler instances for session operations:
- Login (open or reuse a session)
- Logout (this session, or every session)
- Refresh (rotate the refresh secret)

Each handler shares one AsyncSession between its repository and its unit of
work, so the repository's savepoints nest inside the unit of work's
transaction.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sessionguard.core.config import settings
from sessionguard.core.container.infrastructure import (
    get_access_token_service,
    get_clock,
    get_db_session,
    get_logger,
    get_password_service,
    get_refresh_secret_generator,
    get_token_digester,
)

if TYPE_CHECKING:
    from sessionguard.application.commands.handlers import (
        LoginUserHandler,
        LogoutAllSessionsHandler,
        LogoutSessionHandler,
        RefreshSessionHandler,
    )


async def get_login_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginUserHandler":
    """Get LoginUser command handler (request-scoped).

    Returns:
        LoginUserHandler instance.
    """
    from sessionguard.application.commands.handlers import LoginUserHandler
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return LoginUserHandler(
        user_repo=UserRepository(session=session),
        session_repo=SessionRepository(session=session, clock=get_clock()),
        password_service=get_password_service(),
        token_digester=get_token_digester(),
        secret_generator=get_refresh_secret_generator(),
        access_token_service=get_access_token_service(),
        unit_of_work=SqlAlchemyUnitOfWork(session=session),
        clock=get_clock(),
        logger=get_logger(),
        session_ttl_seconds=settings.session_ttl_seconds,
        secret_length=settings.session_secret_length,
    )


async def get_logout_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutSessionHandler":
    """Get LogoutSession command handler (request-scoped)."""
    from sessionguard.application.commands.handlers import LogoutSessionHandler
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return LogoutSessionHandler(
        session_repo=SessionRepository(session=session, clock=get_clock()),
        token_digester=get_token_digester(),
        unit_of_work=SqlAlchemyUnitOfWork(session=session),
        clock=get_clock(),
        logger=get_logger(),
    )


async def get_logout_all_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutAllSessionsHandler":
    """Get LogoutAllSessions command handler (request-scoped)."""
    from sessionguard.application.commands.handlers import LogoutAllSessionsHandler
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return LogoutAllSessionsHandler(
        session_repo=SessionRepository(session=session, clock=get_clock()),
        unit_of_work=SqlAlchemyUnitOfWork(session=session),
        clock=get_clock(),
        logger=get_logger(),
    )


async def get_refresh_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshSessionHandler":
    """Get RefreshSession command handler (request-scoped).

    Returns:
        RefreshSessionHandler instance.
    """
    from sessionguard.application.commands.handlers import RefreshSessionHandler
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return RefreshSessionHandler(
        session_repo=SessionRepository(session=session, clock=get_clock()),
        token_digester=get_token_digester(),
        secret_generator=get_refresh_secret_generator(),
        access_token_service=get_access_token_service(),
        unit_of_work=SqlAlchemyUnitOfWork(session=session),
        clock=get_clock(),
        logger=get_logger(),
        secret_length=settings.session_secret_length,
    )
