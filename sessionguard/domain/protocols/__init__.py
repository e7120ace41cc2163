"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from sessionguard.domain.protocols import SessionRepository, TokenDigesterProtocol
"""

# Service protocols
from sessionguard.domain.protocols.access_token_protocol import AccessTokenProtocol
from sessionguard.domain.protocols.clock_protocol import ClockProtocol
from sessionguard.domain.protocols.logger_protocol import LoggerProtocol
from sessionguard.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from sessionguard.domain.protocols.refresh_secret_generator_protocol import (
    RefreshSecretGeneratorProtocol,
)
from sessionguard.domain.protocols.token_digester_protocol import (
    TokenDigesterProtocol,
)
from sessionguard.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol

# Repository protocols
from sessionguard.domain.protocols.session_repository import SessionRepository
from sessionguard.domain.protocols.user_repository import UserRepository

__all__ = [
    "AccessTokenProtocol",
    "ClockProtocol",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "RefreshSecretGeneratorProtocol",
    "TokenDigesterProtocol",
    "UnitOfWorkProtocol",
    "SessionRepository",
    "UserRepository",
]
