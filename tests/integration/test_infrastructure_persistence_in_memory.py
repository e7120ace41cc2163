"""Integration tests for the in-memory persistence adapters.

Tests cover:
- Active session lookup (status, expiry, ordering, active tokens only)
- Refresh lookup by digest (presented token plus active token)
- Storage constraints (one active token per session, unique digest)
- Lost rotation race reported as DATABASE_CONFLICT
- Stale copies cannot revive a session ended by logout or reuse detection
- Unit of work restore on exception
- Full flows through the real handlers (login, rotate, reuse, logout)
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from sessionguard.application.commands import (
    LoginUser,
    LogoutAllSessions,
    RefreshSession,
)
from sessionguard.application.commands.handlers import (
    LoginUserHandler,
    LogoutAllSessionsHandler,
    RefreshSessionHandler,
)
from sessionguard.application.dtos import ClientFingerprint
from sessionguard.core.result import Failure, Success
from sessionguard.domain.entities import User
from sessionguard.domain.enums import (
    RefreshTokenStatus,
    SessionEndReason,
    SessionStatus,
)
from sessionguard.domain.errors import RefreshTokenReuseDetectedError
from sessionguard.infrastructure.enums import InfrastructureErrorCode
from sessionguard.infrastructure.persistence.in_memory import (
    InMemorySessionRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from sessionguard.infrastructure.security import SecretsRefreshSecretGenerator
from tests.conftest import SESSION_TTL_SECONDS, make_secret, start_session


@pytest.fixture
def repo(clock):
    return InMemorySessionRepository(clock=clock)


@pytest.fixture
def uow(repo):
    return InMemoryUnitOfWork(repo)


@pytest.mark.integration
class TestInMemorySessionRepositoryLookups:
    """Test read paths."""

    @pytest.mark.asyncio
    async def test_find_active_by_user_id_returns_live_sessions_newest_first(
        self, repo, digester, user_id, now
    ):
        """Test revoked and other users' sessions are excluded."""
        # Arrange
        older = start_session(digester, user_id, now, make_secret(1), client_id="a")
        newer = start_session(digester, user_id, now, make_secret(2), client_id="b")
        revoked = start_session(digester, user_id, now, make_secret(3), client_id="c")
        revoked.revoke(now, SessionEndReason.USER_LOGOUT)
        foreign = start_session(digester, uuid7(), now, make_secret(4))
        for session in (older, newer, revoked, foreign):
            assert isinstance(await repo.save(session), Success)

        # Act
        sessions = await repo.find_active_by_user_id(user_id)

        # Assert
        assert [s.id for s in sessions] == [newer.id, older.id]
        assert all(s.is_new is False for s in sessions)

    @pytest.mark.asyncio
    async def test_find_active_excludes_expired_sessions(
        self, repo, digester, user_id, now, clock
    ):
        """Test sessions past expires_at are not live even if still marked active."""
        session = start_session(digester, user_id, now, make_secret(1), ttl_seconds=60)
        await repo.save(session)
        clock.advance(seconds=60)

        assert await repo.find_active_by_user_id(user_id) == []

    @pytest.mark.asyncio
    async def test_find_active_loads_only_active_tokens(
        self, repo, digester, user_id, now
    ):
        session = start_session(digester, user_id, now, make_secret(1))
        session.rotate_token(
            make_secret(1).value, digester.digest(make_secret(2).value), digester, now
        )
        await repo.save(session)

        (loaded,) = await repo.find_active_by_user_id(user_id)

        assert len(loaded.tokens) == 1
        assert loaded.has_active_refresh_token(make_secret(2).value, digester)

    @pytest.mark.asyncio
    async def test_find_session_for_refresh_loads_presented_and_active_token(
        self, repo, digester, user_id, now
    ):
        """Test a stale digest finds its session with both tokens loaded."""
        session = start_session(digester, user_id, now, make_secret(1))
        stale_id = session.active_token.id
        session.rotate_token(
            make_secret(1).value, digester.digest(make_secret(2).value), digester, now
        )
        session.rotate_token(
            make_secret(2).value, digester.digest(make_secret(3).value), digester, now
        )
        await repo.save(session)

        loaded = await repo.find_session_for_refresh(digester.digest(make_secret(1).value))

        assert loaded is not None
        assert loaded.id == session.id
        statuses = {token.id: token.status for token in loaded.tokens}
        assert statuses[stale_id] == RefreshTokenStatus.ROTATED
        assert list(statuses.values()).count(RefreshTokenStatus.ACTIVE) == 1
        assert len(statuses) == 2

    @pytest.mark.asyncio
    async def test_find_session_for_refresh_unknown_digest(self, repo, digester):
        assert await repo.find_session_for_refresh(digester.digest(bytes(16))) is None

    @pytest.mark.asyncio
    async def test_reads_return_independent_copies(self, repo, digester, user_id, now):
        """Test mutating a loaded aggregate does not change stored rows."""
        await repo.save(start_session(digester, user_id, now, make_secret(1)))

        (loaded,) = await repo.find_active_by_user_id(user_id)
        loaded.revoke(now, SessionEndReason.USER_LOGOUT)

        (again,) = await repo.find_active_by_user_id(user_id)
        assert again.status == SessionStatus.ACTIVE


@pytest.mark.integration
class TestInMemorySessionRepositoryConstraints:
    """Test write-time constraint enforcement."""

    @pytest.mark.asyncio
    async def test_concurrent_rotation_second_writer_conflicts(
        self, repo, digester, user_id, now
    ):
        """Test two copies rotating the same token cannot both be stored."""
        # Arrange
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        presented = digester.digest(make_secret(1).value)
        first = await repo.find_session_for_refresh(presented)
        second = await repo.find_session_for_refresh(presented)

        first.rotate_token(
            make_secret(1).value, digester.digest(make_secret(2).value), digester, now
        )
        second.rotate_token(
            make_secret(1).value, digester.digest(make_secret(3).value), digester, now
        )

        # Act
        first_result = await repo.save(first)
        second_result = await repo.save(second)

        # Assert
        assert isinstance(first_result, Success)
        assert isinstance(second_result, Failure)
        assert second_result.error.is_conflict is True
        assert (
            second_result.error.infrastructure_code
            == InfrastructureErrorCode.DATABASE_CONFLICT
        )
        assert second_result.error.details["constraint"] == (
            "one_active_token_per_session"
        )
        (stored,) = await repo.find_active_by_user_id(user_id)
        assert stored.has_active_refresh_token(make_secret(2).value, digester)

    @pytest.mark.asyncio
    async def test_rotation_loaded_before_logout_cannot_revive_session(
        self, repo, digester, user_id, now
    ):
        """Test a copy loaded while active cannot overwrite a committed logout."""
        # Arrange
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        rotating = await repo.find_session_for_refresh(
            digester.digest(make_secret(1).value)
        )
        (logging_out,) = await repo.find_active_by_user_id(user_id)

        logging_out.revoke(now, SessionEndReason.USER_LOGOUT)
        assert isinstance(await repo.save(logging_out), Success)

        later = now + timedelta(seconds=1)
        assert isinstance(
            rotating.rotate_token(
                make_secret(1).value,
                digester.digest(make_secret(2).value),
                digester,
                later,
            ),
            Success,
        )

        # Act
        result = await repo.save(rotating)

        # Assert
        assert isinstance(result, Failure)
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.DATABASE_CONFLICT
        )
        assert result.error.details["constraint"] == "session_not_active"
        assert await repo.find_active_by_user_id(user_id) == []
        assert (
            await repo.find_session_for_refresh(digester.digest(make_secret(2).value))
            is None
        )
        stored = await repo.find_session_for_refresh(
            digester.digest(make_secret(1).value)
        )
        assert stored.status == SessionStatus.REVOKED
        assert stored.end_reason == SessionEndReason.USER_LOGOUT

    @pytest.mark.asyncio
    async def test_rotation_loaded_before_reuse_detection_conflicts(
        self, repo, digester, user_id, now
    ):
        """Test a racing rotation cannot outlive a committed reuse detection."""
        # Arrange
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        presented = digester.digest(make_secret(1).value)
        victim = await repo.find_session_for_refresh(presented)
        thief = await repo.find_session_for_refresh(presented)

        victim.rotate_token(
            make_secret(1).value, digester.digest(make_secret(2).value), digester, now
        )
        await repo.save(victim)

        replayed = await repo.find_session_for_refresh(presented)
        replay_result = replayed.rotate_token(
            make_secret(1).value, digester.digest(make_secret(3).value), digester, now
        )
        assert isinstance(replay_result, Failure)
        assert isinstance(await repo.save(replayed), Success)

        thief.rotate_token(
            make_secret(1).value, digester.digest(make_secret(4).value), digester, now
        )

        # Act
        result = await repo.save(thief)

        # Assert
        assert isinstance(result, Failure)
        assert result.error.is_conflict is True
        stored = await repo.find_session_for_refresh(presented)
        assert stored.status == SessionStatus.REUSE_DETECTED
        assert (
            await repo.find_session_for_refresh(digester.digest(make_secret(4).value))
            is None
        )

    @pytest.mark.asyncio
    async def test_repeated_revoke_is_accepted(self, repo, digester, user_id, now):
        """Test two copies ending the session the same way both store."""
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        (first,) = await repo.find_active_by_user_id(user_id)
        (second,) = await repo.find_active_by_user_id(user_id)

        first.revoke(now, SessionEndReason.USER_LOGOUT)
        second.revoke(now, SessionEndReason.GLOBAL_LOGOUT)

        assert isinstance(await repo.save(first), Success)
        assert isinstance(await repo.save(second), Success)
        assert await repo.find_active_by_user_id(user_id) == []

    @pytest.mark.asyncio
    async def test_rotated_token_keeps_status_against_stale_revoke(
        self, repo, digester, user_id, now
    ):
        """Test a terminal token row is not rewritten with another status."""
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        presented = digester.digest(make_secret(1).value)
        (logging_out,) = await repo.find_active_by_user_id(user_id)
        rotating = await repo.find_session_for_refresh(presented)
        rotating.rotate_token(
            make_secret(1).value, digester.digest(make_secret(2).value), digester, now
        )
        await repo.save(rotating)

        logging_out.revoke(now, SessionEndReason.USER_LOGOUT)
        await repo.save(logging_out)

        stored = await repo.find_session_for_refresh(presented)
        statuses = {token.digest: token.status for token in stored.tokens}
        assert statuses[presented] == RefreshTokenStatus.ROTATED
        assert stored.status == SessionStatus.REVOKED

    @pytest.mark.asyncio
    async def test_duplicate_digest_conflicts(self, repo, digester, user_id, now):
        """Test two sessions cannot share a digest."""
        await repo.save(start_session(digester, user_id, now, make_secret(1)))

        result = await repo.save(
            start_session(digester, user_id, now, make_secret(1), client_id="phone")
        )

        assert isinstance(result, Failure)
        assert result.error.details["constraint"] == "unique_digest"

    @pytest.mark.asyncio
    async def test_failed_save_leaves_aggregate_unpersisted(
        self, repo, digester, user_id, now
    ):
        await repo.save(start_session(digester, user_id, now, make_secret(1)))
        duplicate = start_session(digester, user_id, now, make_secret(1))

        await repo.save(duplicate)

        assert duplicate.is_new is True


@pytest.mark.integration
class TestInMemoryUnitOfWork:
    """Test atomic scope restore."""

    @pytest.mark.asyncio
    async def test_exception_restores_rows(self, repo, uow, digester, user_id, now):
        """Test writes inside a failed scope are discarded."""
        await repo.save(start_session(digester, user_id, now, make_secret(1)))

        with pytest.raises(RuntimeError):
            async with uow.atomic():
                await repo.save(
                    start_session(digester, user_id, now, make_secret(2), client_id="b")
                )
                raise RuntimeError("boom")

        assert len(await repo.find_active_by_user_id(user_id)) == 1

    @pytest.mark.asyncio
    async def test_aggregate_from_rolled_back_scope_cannot_be_saved(
        self, repo, uow, digester, user_id, now
    ):
        """Test an aggregate whose rows were discarded conflicts on reuse."""
        session = start_session(digester, user_id, now, make_secret(1))

        with pytest.raises(RuntimeError):
            async with uow.atomic():
                await repo.save(session)
                raise RuntimeError("commit failed")

        session.revoke(now, SessionEndReason.USER_LOGOUT)
        result = await repo.save(session)

        assert isinstance(result, Failure)
        assert result.error.details["constraint"] == "session_not_active"
        assert await repo.find_session_for_refresh(
            digester.digest(make_secret(1).value)
        ) is None

    @pytest.mark.asyncio
    async def test_successful_scope_keeps_rows(self, repo, uow, digester, user_id, now):
        async with uow.atomic():
            await repo.save(start_session(digester, user_id, now, make_secret(1)))

        assert len(await repo.find_active_by_user_id(user_id)) == 1


@pytest.mark.integration
class TestInMemoryUserRepository:
    """Test user lookup."""

    @pytest.mark.asyncio
    async def test_find_by_email_is_case_insensitive(self, user_id):
        user = User(id=user_id, email="Person@Example.com", password_hash="hash")
        users = InMemoryUserRepository([user])

        assert await users.find_by_email("person@example.COM") is user
        assert await users.find_by_email("missing@example.com") is None


@pytest.mark.integration
class TestSessionFlows:
    """End-to-end flows through real handlers and in-memory storage."""

    @pytest.fixture
    def flow(self, repo, uow, clock, digester, user_id):
        password_service = Mock()
        password_service.verify_password.side_effect = (
            lambda password, password_hash: password == "Password123!"
        )
        access_tokens = Mock()
        access_tokens.issue.return_value = "access"
        users = InMemoryUserRepository(
            [User(id=user_id, email="user@example.com", password_hash="hash")]
        )
        generator = SecretsRefreshSecretGenerator()
        logger = Mock()
        return {
            "login": LoginUserHandler(
                user_repo=users,
                session_repo=repo,
                password_service=password_service,
                token_digester=digester,
                secret_generator=generator,
                access_token_service=access_tokens,
                unit_of_work=uow,
                clock=clock,
                logger=logger,
                session_ttl_seconds=SESSION_TTL_SECONDS,
            ),
            "refresh": RefreshSessionHandler(
                session_repo=repo,
                token_digester=digester,
                secret_generator=generator,
                access_token_service=access_tokens,
                unit_of_work=uow,
                clock=clock,
                logger=logger,
            ),
            "logout_all": LogoutAllSessionsHandler(
                session_repo=repo, unit_of_work=uow, clock=clock, logger=logger
            ),
        }

    @pytest.mark.asyncio
    async def test_login_rotate_then_replay_kills_session(
        self, flow, repo, clock, user_id
    ):
        """Test a replayed secret ends the session for every holder."""
        # Arrange
        fingerprint = ClientFingerprint(client_id="desktop")
        login = await flow["login"].handle(
            LoginUser(
                email="user@example.com", password="Password123!", fingerprint=fingerprint
            )
        )
        first_secret = login.value.refresh_secret
        clock.advance(minutes=5)
        rotated = await flow["refresh"].handle(
            RefreshSession(fingerprint=fingerprint, refresh_secret=first_secret)
        )
        assert isinstance(rotated, Success)

        # Act
        replay = await flow["refresh"].handle(
            RefreshSession(fingerprint=fingerprint, refresh_secret=first_secret)
        )
        after = await flow["refresh"].handle(
            RefreshSession(
                fingerprint=fingerprint, refresh_secret=rotated.value.refresh_secret
            )
        )

        # Assert
        assert isinstance(replay, Failure)
        assert isinstance(replay.error, RefreshTokenReuseDetectedError)
        assert isinstance(after, Failure)
        assert await repo.find_active_by_user_id(user_id) == []

    @pytest.mark.asyncio
    async def test_refresh_keeps_absolute_expiry(self, flow, clock):
        fingerprint = ClientFingerprint(client_id="desktop")
        login = await flow["login"].handle(
            LoginUser(
                email="user@example.com", password="Password123!", fingerprint=fingerprint
            )
        )
        clock.advance(days=10)

        rotated = await flow["refresh"].handle(
            RefreshSession(
                fingerprint=fingerprint, refresh_secret=login.value.refresh_secret
            )
        )

        assert rotated.value.expires_at == login.value.expires_at
        assert rotated.value.expires_at - clock.now() == timedelta(days=20)

    @pytest.mark.asyncio
    async def test_logout_everywhere_revokes_all_devices(self, flow, repo, user_id):
        for client_id in ("desktop", "phone"):
            await flow["login"].handle(
                LoginUser(
                    email="user@example.com",
                    password="Password123!",
                    fingerprint=ClientFingerprint(client_id=client_id),
                )
            )

        result = await flow["logout_all"].handle(LogoutAllSessions(user_id=user_id))

        assert result == Success(value=2)
        assert await repo.find_active_by_user_id(user_id) == []
