"""Database models package."""

from sessionguard.infrastructure.persistence.models.refresh_token import (
    RefreshTokenModel,
)
from sessionguard.infrastructure.persistence.models.session import SessionModel
from sessionguard.infrastructure.persistence.models.user import UserModel

__all__ = ["RefreshTokenModel", "SessionModel", "UserModel"]
