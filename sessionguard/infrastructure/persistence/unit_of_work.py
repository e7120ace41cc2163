"""SQLAlchemy unit of work (implements UnitOfWorkProtocol)."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession


class SqlAlchemyUnitOfWork:
    """Atomic scope over one AsyncSession.

    Repositories built on the same AsyncSession participate in the scope.
    Each repository save runs in its own savepoint, so a failed save leaves
    the outer transaction usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with the request's database session.

        Args:
            session: SQLAlchemy async session shared with repositories.
        """
        self._session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncGenerator[None, None]:
        """Commit on normal exit; roll back and re-raise on exception."""
        try:
            yield
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
