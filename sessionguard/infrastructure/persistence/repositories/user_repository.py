"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Read-only adapter used by login. User registration lives elsewhere.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sessionguard.domain.entities import User
from sessionguard.infrastructure.persistence.models import UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = UserRepository(db_session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: Email address.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self._session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
        )
