"""Core errors package.

Usage:
    from sessionguard.core.errors import DomainError, AuthenticationError
"""

from sessionguard.core.errors.common_errors import (
    AggregateError,
    AuthenticationError,
    ValidationError,
)
from sessionguard.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "AuthenticationError",
    "AggregateError",
]
