"""User database model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sessionguard.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User account row.

    Fields:
        email: Lowercased email address (unique)
        password_hash: Bcrypt hash (NEVER plaintext)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Lowercased email address",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt password hash (NEVER plaintext)",
    )
