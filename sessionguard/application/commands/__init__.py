"""Session commands."""

from sessionguard.application.commands.auth_commands import (
    LoginUser,
    LogoutAllSessions,
    LogoutSession,
    RefreshSession,
)

__all__ = ["LoginUser", "LogoutAllSessions", "LogoutSession", "RefreshSession"]
