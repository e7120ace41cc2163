"""Refresh token status.

Tokens are created ACTIVE and move to exactly one of the other statuses.
"""

from enum import Enum


class RefreshTokenStatus(str, Enum):
    """Status of a single refresh token in a session's rotation chain."""

    ACTIVE = "active"
    ROTATED = "rotated"
    REVOKED = "revoked"
    EXPIRED = "expired"
    REUSE_DETECTED = "reuse_detected"
