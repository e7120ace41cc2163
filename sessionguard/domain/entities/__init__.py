"""Domain entities package."""

from sessionguard.domain.entities.entity_identity import EntityIdentity
from sessionguard.domain.entities.refresh_token import RefreshToken
from sessionguard.domain.entities.session import Session
from sessionguard.domain.entities.user import User

__all__ = ["EntityIdentity", "RefreshToken", "Session", "User"]
