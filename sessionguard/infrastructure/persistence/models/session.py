"""Session database model.

One row per login. Rows are never deleted; ended sessions keep their
terminal status, end time, and reason.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sessionguard.infrastructure.persistence.base import BaseMutableModel


class SessionModel(BaseMutableModel):
    """Session aggregate root row.

    Indexes:
        - idx_sessions_user_status: (user_id, status) for active session lookup
    """

    __tablename__ = "sessions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who owns this session",
    )

    client_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Client (device) identifier from the request fingerprint",
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="active, revoked, expired, reuse_detected",
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Absolute expiry (never extended by rotation)",
    )

    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Last successful use",
    )

    ip: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        comment="Client IP at login (IPv4 or IPv6)",
    )

    user_agent: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Client user agent at login",
    )

    ended_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the session left active",
    )

    end_reason: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="user_logout, global_logout, expired, token_reuse_detected, no_active_token",
    )

    __table_args__ = (Index("idx_sessions_user_status", "user_id", "status"),)
