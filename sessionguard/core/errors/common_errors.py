"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures
- AuthenticationError: Authentication failures (collapsed to "unauthorized")
- AggregateError: Several independent failures reported together
"""

from dataclasses import dataclass

from sessionguard.core.enums import ErrorCode
from sessionguard.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, dead session, bad token).

    Every subclass is reported to callers as "unauthorized"; the code and
    message stay available for diagnostics and logs.
    """

    @property
    def is_unauthorized(self) -> bool:
        """Authentication errors are always unauthorized."""
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class AggregateError(DomainError):
    """Several failures collected from one batch operation.

    Used by global logout, where each session is revoked independently and
    successful revokes are kept even when others fail.

    Attributes:
        errors: The individual failures, in the order they occurred.
    """

    code: ErrorCode = ErrorCode.MULTIPLE_ERRORS
    message: str = "One or more operations failed"
    errors: tuple[DomainError, ...] = ()

    def __str__(self) -> str:
        """String representation including nested error codes."""
        nested = ", ".join(error.code.value for error in self.errors)
        return f"{self.code.value}: {self.message} [{nested}]"
