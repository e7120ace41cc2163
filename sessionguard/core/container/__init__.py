"""Container module - Centralized dependency injection.

Re-exports every factory function so callers import from one place:

    from sessionguard.core.container import get_logger, get_login_user_handler

The container is organized into modules:
- infrastructure: Core services (db, logging, crypto, clock)
- repositories: Repository and unit of work factories
- auth_handlers: Session handler factories
"""

# Infrastructure services
from sessionguard.core.container.infrastructure import (
    get_access_token_service,
    get_clock,
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_refresh_secret_generator,
    get_token_digester,
)

# Repositories
from sessionguard.core.container.repositories import (
    get_session_repository,
    get_unit_of_work,
    get_user_repository,
)

# Auth handlers
from sessionguard.core.container.auth_handlers import (
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_session_handler,
    get_refresh_session_handler,
)

__all__ = [
    # Infrastructure
    "get_access_token_service",
    "get_clock",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_refresh_secret_generator",
    "get_token_digester",
    # Repositories
    "get_session_repository",
    "get_unit_of_work",
    "get_user_repository",
    # Auth handlers
    "get_login_user_handler",
    "get_logout_all_sessions_handler",
    "get_logout_session_handler",
    "get_refresh_session_handler",
]
