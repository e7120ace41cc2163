"""Infrastructure errors package."""

from sessionguard.infrastructure.errors.infrastructure_error import (
    DatabaseError,
    InfrastructureError,
)

__all__ = ["DatabaseError", "InfrastructureError"]
