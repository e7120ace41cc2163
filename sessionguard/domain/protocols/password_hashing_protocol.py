"""PasswordHashingProtocol - password hash/verify port."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing service.

    Implementations must compare in constant time and return False (not
    raise) for malformed hashes.
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password.

        Returns:
            Password hash suitable for storage.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Args:
            password: Plaintext password.
            password_hash: Stored hash.

        Returns:
            True if the password matches.
        """
        ...
