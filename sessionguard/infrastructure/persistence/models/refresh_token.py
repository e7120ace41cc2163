"""Refresh token database model.

Security:
    - digest: keyed HMAC of the secret (NEVER the secret itself)
    - uq_refresh_tokens_digest: one row per digest, direct lookup on refresh
    - uq_refresh_tokens_one_active: at most one active token per session; a
      concurrent rotation that loses the race fails on this index
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, LargeBinary, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from sessionguard.infrastructure.persistence.base import BaseMutableModel


class RefreshTokenModel(BaseMutableModel):
    """Refresh token row (one link of a session's rotation chain).

    Indexes:
        - uq_refresh_tokens_digest: (digest) unique
        - uq_refresh_tokens_one_active: (session_id) unique WHERE status = 'active'
        - idx_refresh_tokens_session_id: (session_id)
        - idx_refresh_tokens_previous_token_id: (previous_token_id)
    """

    __tablename__ = "refresh_tokens"

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning session",
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user",
    )

    digest: Mapped[bytes] = mapped_column(
        LargeBinary(64),
        nullable=False,
        comment="HMAC digest of the refresh secret (NEVER plaintext)",
    )

    digest_algorithm: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="HMAC algorithm used for digest (sha256, sha512)",
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="active, rotated, revoked, expired, reuse_detected",
    )

    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the token was issued",
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Token expiry (never after the session expiry)",
    )

    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Last use (rotation time for rotated tokens)",
    )

    ip: Mapped[str | None] = mapped_column(String(45), nullable=True)

    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    previous_token_id: Mapped[UUID | None] = mapped_column(
        nullable=True,
        index=True,
        comment="Token this one replaced (lookup key, not a foreign key)",
    )

    __table_args__ = (
        Index("uq_refresh_tokens_digest", "digest", unique=True),
        Index(
            "uq_refresh_tokens_one_active",
            "session_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<RefreshTokenModel("
            f"id={self.id}, "
            f"session_id={self.session_id}, "
            f"status={self.status}"
            f")>"
        )
