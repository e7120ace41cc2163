"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (the database).

Architecture:
- Adapters catch library exceptions and map them to these errors
- Infrastructure errors inherit from DomainError (not Exception)
- InfrastructureErrorCode carries the storage-level reason
"""

from dataclasses import dataclass
from typing import Any

from sessionguard.core.errors import DomainError
from sessionguard.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Database-specific errors.

    A DATABASE_CONFLICT infrastructure code means a concurrent writer won the
    race (one-active-token or unique-digest constraint).
    """

    @property
    def is_conflict(self) -> bool:
        """Whether the failure was a lost race on a uniqueness constraint."""
        return self.infrastructure_code == InfrastructureErrorCode.DATABASE_CONFLICT
