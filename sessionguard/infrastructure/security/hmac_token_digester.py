"""HMAC refresh secret digester (adapter).

Implements TokenDigesterProtocol with HMAC over a server-side key.

Security:
    - Keyed: a leaked database alone does not allow forging digests
    - Deterministic: the same secret always maps to the same digest, so
      storage can look sessions up directly by digest
    - Constant-time verification via hmac.compare_digest
"""

import hashlib
import hmac
from collections.abc import Callable
from typing import Any

from sessionguard.domain.value_objects import Digest

SUPPORTED_ALGORITHMS: dict[str, Callable[..., Any]] = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


class HmacTokenDigester:
    """HMAC digester for refresh secrets.

    Usage:
        digester = HmacTokenDigester(secret_key=settings.refresh_token_secret)
        digest = digester.digest(secret.value)
        digester.verify(secret.value, digest)  # True
    """

    def __init__(self, secret_key: str | bytes, algorithm: str = "sha256") -> None:
        """Initialize digester.

        Args:
            secret_key: Server-side HMAC key.
            algorithm: Hash algorithm name (sha256 or sha512).

        Raises:
            ValueError: If the algorithm is unsupported or the key is empty.
        """
        algorithm = algorithm.lower()
        if algorithm not in SUPPORTED_ALGORITHMS:
            msg = (
                f"Unsupported HMAC algorithm: {algorithm}. "
                f"Supported: {', '.join(SUPPORTED_ALGORITHMS)}"
            )
            raise ValueError(msg)

        key = secret_key.encode("utf-8") if isinstance(secret_key, str) else secret_key
        if not key:
            raise ValueError("HMAC secret key must not be empty")

        self._key = key
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def digest(self, secret: bytes) -> Digest:
        """Compute the keyed digest of a secret.

        Args:
            secret: Raw secret bytes.

        Returns:
            Digest tagged with this digester's algorithm.
        """
        value = hmac.new(self._key, secret, SUPPORTED_ALGORITHMS[self._algorithm])
        return Digest(value=value.digest(), algorithm=self._algorithm)

    def verify(self, secret: bytes, digest: Digest) -> bool:
        """Verify a secret against a stored digest.

        The digest is recomputed with the algorithm recorded on the stored
        digest, so tokens issued before an algorithm change still verify.

        Args:
            secret: Raw secret bytes.
            digest: Stored digest.

        Returns:
            True on match. False on mismatch, length mismatch, or unknown
            algorithm tag.
        """
        hash_function = SUPPORTED_ALGORITHMS.get(digest.algorithm)
        if hash_function is None:
            return False

        expected = hmac.new(self._key, secret, hash_function).digest()
        if len(expected) != len(digest.value):
            return False
        return hmac.compare_digest(expected, digest.value)
