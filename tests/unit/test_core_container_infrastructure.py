"""Unit tests for infrastructure and handler dependency factories.

Tests cover:
- App-scoped factories return cached singletons built from settings
- Handler factories wire one AsyncSession through repository and unit of work
"""

from unittest.mock import MagicMock

import pytest

from sessionguard.application.commands.handlers import (
    LoginUserHandler,
    LogoutAllSessionsHandler,
    LogoutSessionHandler,
    RefreshSessionHandler,
)
from sessionguard.core.config import settings
from sessionguard.core.container import (
    get_access_token_service,
    get_clock,
    get_login_user_handler,
    get_logout_all_sessions_handler,
    get_logout_session_handler,
    get_password_service,
    get_refresh_secret_generator,
    get_refresh_session_handler,
    get_session_repository,
    get_token_digester,
    get_unit_of_work,
    get_user_repository,
)
from sessionguard.infrastructure.clock import SystemClock
from sessionguard.infrastructure.persistence import SqlAlchemyUnitOfWork
from sessionguard.infrastructure.persistence.repositories import (
    SessionRepository,
    UserRepository,
)
from sessionguard.infrastructure.security import (
    BcryptPasswordService,
    HmacTokenDigester,
    JWTService,
    SecretsRefreshSecretGenerator,
)


@pytest.mark.unit
class TestInfrastructureFactories:
    """Test app-scoped singletons."""

    @pytest.mark.parametrize(
        ("factory", "expected_type"),
        [
            (get_token_digester, HmacTokenDigester),
            (get_access_token_service, JWTService),
            (get_password_service, BcryptPasswordService),
            (get_refresh_secret_generator, SecretsRefreshSecretGenerator),
            (get_clock, SystemClock),
        ],
    )
    def test_factory_returns_cached_instance(self, factory, expected_type):
        """Test each factory builds its adapter once."""
        first = factory()

        assert isinstance(first, expected_type)
        assert factory() is first

    def test_token_digester_uses_configured_algorithm(self):
        assert get_token_digester().algorithm == settings.refresh_token_digest_algorithm

    def test_access_token_lifetime_from_settings(self):
        assert (
            get_access_token_service().expires_in
            == settings.access_token_expire_minutes * 60
        )


@pytest.mark.unit
class TestHandlerFactories:
    """Test request-scoped handler wiring."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("factory", "expected_type"),
        [
            (get_login_user_handler, LoginUserHandler),
            (get_logout_session_handler, LogoutSessionHandler),
            (get_logout_all_sessions_handler, LogoutAllSessionsHandler),
            (get_refresh_session_handler, RefreshSessionHandler),
        ],
    )
    async def test_handler_shares_db_session(self, factory, expected_type):
        """Test repository and unit of work use the same request session."""
        db_session = MagicMock()

        handler = await factory(session=db_session)

        assert isinstance(handler, expected_type)
        assert handler._session_repo._session is db_session
        assert handler._unit_of_work._session is db_session

    @pytest.mark.asyncio
    async def test_repository_factories_bind_request_session(self):
        db_session = MagicMock()

        session_repo = await get_session_repository(session=db_session)
        user_repo = await get_user_repository(session=db_session)
        unit_of_work = await get_unit_of_work(session=db_session)

        assert isinstance(session_repo, SessionRepository)
        assert isinstance(user_repo, UserRepository)
        assert isinstance(unit_of_work, SqlAlchemyUnitOfWork)
        assert session_repo._session is user_repo._session is db_session
