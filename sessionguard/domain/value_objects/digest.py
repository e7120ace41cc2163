"""Digest value object.

Keyed hash of a refresh secret plus the algorithm tag used to produce it.
The raw secret is never stored; only its digest is.
"""

import hmac
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, eq=False)
class Digest:
    """Keyed digest of a refresh secret.

    Equality is constant-time so a digest can be compared against stored
    values without leaking how many leading bytes match.

    Attributes:
        value: Raw digest bytes.
        algorithm: Algorithm tag (e.g. "sha256").

    Raises:
        ValueError: If value or algorithm is empty.
    """

    value: bytes
    algorithm: str

    def __post_init__(self) -> None:
        """Reject empty digests and missing algorithm tags."""
        if not self.value:
            raise ValueError("Digest value must not be empty")
        if not self.algorithm:
            raise ValueError("Digest algorithm must not be empty")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digest):
            return NotImplemented
        return self.algorithm == other.algorithm and hmac.compare_digest(
            self.value, other.value
        )

    def __hash__(self) -> int:
        return hash((self.algorithm, self.value))

    def __repr__(self) -> str:
        return f"Digest(algorithm={self.algorithm!r}, length={len(self.value)})"
