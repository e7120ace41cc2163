"""JWT access token service (adapter).

Implements AccessTokenProtocol using PyJWT with HMAC-SHA256.

Claims:
    sub: User ID
    iss: Configured issuer
    aud: Configured audience
    iat: Issued at
    exp: Expires at
    jti: Unique token ID (UUIDv7)

All six claims are required on verification; issuer and audience must match.
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from sessionguard.core.result import Failure, Result, Success
from sessionguard.domain.errors import InvalidAccessTokenError
from sessionguard.domain.value_objects import AccessTokenClaims

REQUIRED_CLAIMS = ["sub", "iss", "aud", "exp", "iat", "jti"]


class JWTService:
    """JWT access token issuer and verifier.

    Usage:
        from sessionguard.core.container import get_access_token_service

        tokens = get_access_token_service()
        token = tokens.issue(user_id)
        match tokens.verify(token):
            case Success(value=claims):
                claims.subject  # user_id
            case Failure(error=error):
                error.cause
    """

    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        audience: str,
        expiration_minutes: int = 10,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Signing key. MUST be at least 32 bytes.
            issuer: Value of the iss claim.
            audience: Value of the aud claim.
            expiration_minutes: Token lifetime in minutes (default: 10).
            algorithm: Signing algorithm (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self._expiration_minutes * 60

    def issue(self, user_id: UUID) -> str:
        """Issue an access token for a user.

        Args:
            user_id: Subject of the token.

        Returns:
            Encoded JWT (header.payload.signature).
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def verify(self, token: str) -> Result[AccessTokenClaims, InvalidAccessTokenError]:
        """Verify a token and extract its claims.

        Args:
            token: Encoded JWT.

        Returns:
            Success(AccessTokenClaims) if valid, otherwise
            Failure(InvalidAccessTokenError) with a diagnostic cause.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError:
            return Failure(error=InvalidAccessTokenError(cause="expired"))
        except InvalidTokenError as e:
            return Failure(error=InvalidAccessTokenError(cause=type(e).__name__))

        try:
            subject = UUID(str(payload["sub"]))
        except ValueError:
            return Failure(error=InvalidAccessTokenError(cause="malformed subject"))

        raw_audience = payload["aud"]
        audience = (
            (raw_audience,) if isinstance(raw_audience, str) else tuple(raw_audience)
        )

        return Success(
            value=AccessTokenClaims(
                subject=subject,
                issuer=str(payload["iss"]),
                audience=audience,
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                token_id=str(payload["jti"]),
            )
        )
