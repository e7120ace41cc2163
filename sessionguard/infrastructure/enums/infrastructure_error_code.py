"""Infrastructure-specific error codes.

These are internal codes for tracking storage failures.
They travel alongside a domain ErrorCode on InfrastructureError.
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Database errors
    DATABASE_CONNECTION_FAILED = "database_connection_failed"
    DATABASE_CONSTRAINT_VIOLATION = "database_constraint_violation"
    DATABASE_CONFLICT = "database_conflict"
    DATABASE_ERROR = "database_error"
