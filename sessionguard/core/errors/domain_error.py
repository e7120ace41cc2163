"""Base domain error class for railway-oriented programming.

DomainError is the base class for ALL errors that flow through Result types.
They are returned as data, never raised.

Architecture:
- Base class for all error types (core, domain, infrastructure)
- Does NOT inherit from Exception
- Uses dataclass inheritance (NOT Protocol/ABC)

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from sessionguard.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable diagnostic message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    @property
    def is_unauthorized(self) -> bool:
        """Whether callers should treat this error as an authentication failure."""
        return False

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
