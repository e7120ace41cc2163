"""Unit tests for the RefreshToken entity.

Tests cover:
- RefreshToken.fresh (active, expiry from ttl, chaining)
- hydrate (stored state kept as-is, not new)
- Status transitions
"""

from datetime import timedelta

import pytest
from uuid_extensions import uuid7

from sessionguard.domain.entities import RefreshToken
from sessionguard.domain.enums import RefreshTokenStatus
from tests.conftest import make_secret


@pytest.fixture
def fresh_token(digester, user_id, now):
    return RefreshToken.fresh(
        session_id=uuid7(),
        user_id=user_id,
        digest=digester.digest(make_secret(1).value),
        now=now,
        ttl_seconds=3600,
    )


@pytest.mark.unit
class TestRefreshTokenFresh:
    """Test issuing new tokens."""

    def test_fresh_token_is_active_and_new(self, fresh_token, now):
        """Test a fresh token starts active with expiry now + ttl."""
        assert fresh_token.is_active()
        assert fresh_token.is_new is True
        assert fresh_token.issued_at == now
        assert fresh_token.last_used_at == now
        assert fresh_token.expires_at == now + timedelta(seconds=3600)
        assert fresh_token.previous_token_id is None

    def test_fresh_token_records_previous_token(self, digester, user_id, now):
        previous_id = uuid7()

        token = RefreshToken.fresh(
            session_id=uuid7(),
            user_id=user_id,
            digest=digester.digest(make_secret(2).value),
            now=now,
            ttl_seconds=60,
            previous_token_id=previous_id,
        )

        assert token.previous_token_id == previous_id

    def test_zero_ttl_is_allowed(self, digester, user_id, now):
        """Test a rotation in the session's last second yields an instant expiry."""
        token = RefreshToken.fresh(
            session_id=uuid7(),
            user_id=user_id,
            digest=digester.digest(make_secret(2).value),
            now=now,
            ttl_seconds=0,
        )

        assert token.expires_at == now

    def test_negative_ttl_raises(self, digester, user_id, now):
        with pytest.raises(ValueError, match="ttl_seconds"):
            RefreshToken.fresh(
                session_id=uuid7(),
                user_id=user_id,
                digest=digester.digest(make_secret(2).value),
                now=now,
                ttl_seconds=-1,
            )

    def test_fresh_tokens_get_distinct_ids(self, digester, user_id, now):
        tokens = [
            RefreshToken.fresh(
                session_id=uuid7(),
                user_id=user_id,
                digest=digester.digest(make_secret(fill).value),
                now=now,
                ttl_seconds=60,
            )
            for fill in range(1, 4)
        ]

        assert len({token.id for token in tokens}) == 3


@pytest.mark.unit
class TestRefreshTokenHydrate:
    """Test rebuilding stored tokens."""

    def test_hydrate_keeps_stored_state(self, digester, user_id, now):
        token_id = uuid7()

        token = RefreshToken.hydrate(
            id=token_id,
            session_id=uuid7(),
            user_id=user_id,
            digest=digester.digest(make_secret(1).value),
            status=RefreshTokenStatus.ROTATED,
            issued_at=now,
            expires_at=now + timedelta(days=1),
            last_used_at=now + timedelta(minutes=5),
            ip="198.51.100.1",
            user_agent="pytest",
        )

        assert token.id == token_id
        assert token.is_new is False
        assert token.status == RefreshTokenStatus.ROTATED
        assert not token.is_active()
        assert token.ip == "198.51.100.1"


@pytest.mark.unit
class TestRefreshTokenTransitions:
    """Test status transitions."""

    def test_mark_rotated_records_last_use(self, fresh_token, now):
        later = now + timedelta(minutes=1)

        fresh_token.mark_rotated(later)

        assert fresh_token.status == RefreshTokenStatus.ROTATED
        assert fresh_token.last_used_at == later

    @pytest.mark.parametrize(
        ("transition", "expected"),
        [
            ("mark_revoked", RefreshTokenStatus.REVOKED),
            ("mark_reused", RefreshTokenStatus.REUSE_DETECTED),
            ("mark_expired", RefreshTokenStatus.EXPIRED),
        ],
    )
    def test_terminal_transitions(self, fresh_token, transition, expected):
        getattr(fresh_token, transition)()

        assert fresh_token.status == expected
        assert not fresh_token.is_active()

    def test_repr_omits_digest(self, fresh_token):
        assert "digest" not in repr(fresh_token)
        assert "active" in repr(fresh_token)
