"""AccessTokenProtocol - short-lived signed access tokens.

Access tokens are self-contained and stateless. Revoking a session does not
invalidate access tokens already issued; they simply expire.
"""

from typing import Protocol
from uuid import UUID

from sessionguard.core.result import Result
from sessionguard.domain.errors import InvalidAccessTokenError
from sessionguard.domain.value_objects import AccessTokenClaims


class AccessTokenProtocol(Protocol):
    """Issuer and verifier of access tokens."""

    def issue(self, user_id: UUID) -> str:
        """Issue an access token for a user.

        Args:
            user_id: Subject of the token.

        Returns:
            Encoded token string.
        """
        ...

    def verify(self, token: str) -> Result[AccessTokenClaims, InvalidAccessTokenError]:
        """Verify a token and extract its claims.

        Args:
            token: Encoded token string.

        Returns:
            Success(AccessTokenClaims) if signature, expiry, issuer and audience
            are valid and all claims are present; Failure otherwise.
        """
        ...
