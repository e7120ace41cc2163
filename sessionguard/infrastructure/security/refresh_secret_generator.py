"""Refresh secret generator (adapter).

Implements RefreshSecretGeneratorProtocol using the operating system CSPRNG.
"""

import secrets

from sessionguard.domain.value_objects import RefreshSecret


class SecretsRefreshSecretGenerator:
    """Generates refresh secrets with secrets.token_bytes."""

    def generate(self, length: int) -> RefreshSecret:
        """Generate a new random secret.

        Args:
            length: Secret length in bytes (16 to 32).

        Returns:
            RefreshSecret with fresh random bytes.

        Raises:
            ValueError: If length is outside 16..32.
        """
        return RefreshSecret(secrets.token_bytes(length))
