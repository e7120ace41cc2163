"""Domain enums package."""

from sessionguard.domain.enums.refresh_token_status import RefreshTokenStatus
from sessionguard.domain.enums.session_end_reason import SessionEndReason
from sessionguard.domain.enums.session_status import SessionStatus

__all__ = ["RefreshTokenStatus", "SessionEndReason", "SessionStatus"]
