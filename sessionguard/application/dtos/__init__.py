"""Application DTOs."""

from sessionguard.application.dtos.auth_dtos import (
    ClientFingerprint,
    LoginResult,
    RefreshResult,
)

__all__ = ["ClientFingerprint", "LoginResult", "RefreshResult"]
