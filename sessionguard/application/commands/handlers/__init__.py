"""Command handlers (use cases)."""

from sessionguard.application.commands.handlers.login_user_handler import (
    LoginUserHandler,
)
from sessionguard.application.commands.handlers.logout_user_handler import (
    LogoutAllSessionsHandler,
    LogoutSessionHandler,
)
from sessionguard.application.commands.handlers.refresh_session_handler import (
    RefreshSessionHandler,
)

__all__ = [
    "LoginUserHandler",
    "LogoutAllSessionsHandler",
    "LogoutSessionHandler",
    "RefreshSessionHandler",
]
