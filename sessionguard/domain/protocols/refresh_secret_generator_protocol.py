"""RefreshSecretGeneratorProtocol - source of new refresh secrets."""

from typing import Protocol

from sessionguard.domain.value_objects import RefreshSecret


class RefreshSecretGeneratorProtocol(Protocol):
    """Generates cryptographically random refresh secrets."""

    def generate(self, length: int) -> RefreshSecret:
        """Generate a new secret.

        Args:
            length: Secret length in bytes (16 to 32).

        Returns:
            RefreshSecret with fresh random bytes.
        """
        ...
