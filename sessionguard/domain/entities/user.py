"""User domain entity (read model consumed by login)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class User:
    """Registered user.

    Attributes:
        id: User identifier.
        email: Normalized (lowercase) email address.
        password_hash: Bcrypt password hash.
    """

    id: UUID
    email: str
    password_hash: str
