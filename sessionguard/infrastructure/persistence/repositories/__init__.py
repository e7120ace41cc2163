"""Repository implementations (adapters for hexagonal architecture).

Concrete SQLAlchemy implementations of the repository protocols defined in
the domain layer.
"""

from sessionguard.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from sessionguard.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "SessionRepository",
    "UserRepository",
]
