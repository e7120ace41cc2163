"""Refresh secret value object.

The opaque secret handed to the client. It is only ever held in memory for the
duration of a request; storage keeps its digest.
"""

import binascii
from dataclasses import dataclass

MIN_SECRET_LENGTH = 16
MAX_SECRET_LENGTH = 32


@dataclass(frozen=True, slots=True)
class RefreshSecret:
    """Plain refresh secret bytes (16 to 32 bytes).

    Attributes:
        value: Raw secret bytes.

    Raises:
        ValueError: If the secret length is outside 16..32 bytes.

    Example:
        >>> secret = RefreshSecret(bytes(16))
        >>> RefreshSecret.from_hex(secret.hex()) == secret
        True
    """

    value: bytes

    def __post_init__(self) -> None:
        """Validate secret length."""
        if not MIN_SECRET_LENGTH <= len(self.value) <= MAX_SECRET_LENGTH:
            raise ValueError(
                f"Refresh secret must be between {MIN_SECRET_LENGTH} "
                f"and {MAX_SECRET_LENGTH} bytes"
            )

    @classmethod
    def from_hex(cls, encoded: str) -> "RefreshSecret":
        """Decode a hex-encoded secret (cookie transport format).

        Args:
            encoded: Hex string.

        Returns:
            RefreshSecret: Decoded secret.

        Raises:
            ValueError: If the string is not valid hex or has the wrong length.
        """
        try:
            raw = bytes.fromhex(encoded)
        except (ValueError, binascii.Error) as e:
            raise ValueError("Refresh secret is not valid hex") from e
        return cls(raw)

    def hex(self) -> str:
        """Encode the secret for cookie transport."""
        return self.value.hex()

    def __repr__(self) -> str:
        return "RefreshSecret(****)"
