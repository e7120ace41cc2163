"""Why a session stopped being active."""

from enum import Enum


class SessionEndReason(str, Enum):
    """Reason recorded on a session when it leaves ACTIVE."""

    USER_LOGOUT = "user_logout"
    GLOBAL_LOGOUT = "global_logout"
    EXPIRED = "expired"
    TOKEN_REUSE_DETECTED = "token_reuse_detected"
    NO_ACTIVE_TOKEN = "no_active_token"
