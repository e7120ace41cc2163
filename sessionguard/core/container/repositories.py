"""Repository dependency factories.

Request-scoped repository and unit of work instances. Everything built for
one request shares the request's AsyncSession, so repository writes join the
unit of work's transaction.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sessionguard.core.container.infrastructure import get_clock, get_db_session

if TYPE_CHECKING:
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "SessionRepository":
    """Get session repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Returns:
        SessionRepository instance.

    Usage:
        # Presentation Layer (FastAPI Depends)
        @router.get("/sessions")
        async def list_sessions(
            session_repo: SessionRepository = Depends(get_session_repository)
        ):
            ...
    """
    from sessionguard.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return SessionRepository(session=session, clock=get_clock())


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped)."""
    from sessionguard.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_unit_of_work(
    session: AsyncSession = Depends(get_db_session),
) -> "SqlAlchemyUnitOfWork":
    """Get unit of work (request-scoped) over the request's session."""
    from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork

    return SqlAlchemyUnitOfWork(session=session)
