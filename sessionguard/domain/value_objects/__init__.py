"""Domain value objects."""

from sessionguard.domain.value_objects.access_token_claims import AccessTokenClaims
from sessionguard.domain.value_objects.digest import Digest
from sessionguard.domain.value_objects.refresh_secret import RefreshSecret

__all__ = ["AccessTokenClaims", "Digest", "RefreshSecret"]
