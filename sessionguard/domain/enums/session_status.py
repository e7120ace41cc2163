"""Session lifecycle status.

ACTIVE is the only non-terminal status. Once a session leaves ACTIVE it never
returns.
"""

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle status of a Session aggregate."""

    ACTIVE = "active"
    REVOKED = "revoked"
    EXPIRED = "expired"
    REUSE_DETECTED = "reuse_detected"
