"""Security adapters: digests, secrets, access tokens, password hashing."""

from sessionguard.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from sessionguard.infrastructure.security.hmac_token_digester import (
    SUPPORTED_ALGORITHMS,
    HmacTokenDigester,
)
from sessionguard.infrastructure.security.jwt_service import JWTService
from sessionguard.infrastructure.security.refresh_secret_generator import (
    SecretsRefreshSecretGenerator,
)

__all__ = [
    "SUPPORTED_ALGORITHMS",
    "BcryptPasswordService",
    "HmacTokenDigester",
    "JWTService",
    "SecretsRefreshSecretGenerator",
]
