"""TokenDigesterProtocol for keyed refresh secret digests.

Storage never sees raw refresh secrets; it keeps a keyed digest that the
digester can recompute and compare in constant time.
"""

from typing import Protocol

from sessionguard.domain.value_objects import Digest


class TokenDigesterProtocol(Protocol):
    """Keyed, deterministic digest of refresh secrets.

    Implementations are stateless after construction and safe to share.
    Construction must fail fast on an unsupported algorithm.
    """

    def digest(self, secret: bytes) -> Digest:
        """Compute the digest of a secret.

        Args:
            secret: Raw secret bytes.

        Returns:
            Digest tagged with the algorithm used.
        """
        ...

    def verify(self, secret: bytes, digest: Digest) -> bool:
        """Check a secret against a stored digest in constant time.

        Args:
            secret: Raw secret bytes presented by a client.
            digest: Stored digest.

        Returns:
            True if they match. False on mismatch, length mismatch, or an
            unknown algorithm tag (never raises).
        """
        ...
