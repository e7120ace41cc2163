"""UserRepository protocol (port) consumed by login."""

from typing import Protocol

from sessionguard.domain.entities.user import User


class UserRepository(Protocol):
    """User lookup port.

    Implementations should NOT inherit from this protocol.
    """

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email (case-insensitive).

        Args:
            email: Email address.

        Returns:
            User if found, None otherwise.
        """
        ...
