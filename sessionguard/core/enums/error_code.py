"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*)
- Session lifecycle errors (SESSION_*, REFRESH_TOKEN_*)
- Persistence errors (RESOURCE_CONFLICT, PERSISTENCE_FAILED)
- Aggregation (MULTIPLE_ERRORS)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    VALIDATION_FAILED = "validation_failed"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_INVALID = "token_invalid"

    # Session lifecycle errors
    SESSION_NOT_ACTIVE = "session_not_active"
    SESSION_EXPIRED = "session_expired"
    SESSION_INVALID = "session_invalid"
    NO_ACTIVE_REFRESH_TOKEN = "no_active_refresh_token"
    REFRESH_TOKEN_REUSE_DETECTED = "refresh_token_reuse_detected"

    # Persistence errors
    RESOURCE_CONFLICT = "resource_conflict"
    PERSISTENCE_FAILED = "persistence_failed"

    # Aggregation
    MULTIPLE_ERRORS = "multiple_errors"
