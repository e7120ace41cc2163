"""SessionRepository protocol (port) for the Session aggregate.

Repositories load and store whole aggregates: a session together with the
refresh tokens the use case needs.
"""

from typing import Protocol
from uuid import UUID

from sessionguard.core.errors import DomainError
from sessionguard.core.result import Result
from sessionguard.domain.entities.session import Session
from sessionguard.domain.value_objects import Digest


class SessionRepository(Protocol):
    """Session aggregate persistence port.

    Storage must enforce at most one active token per session and unique
    digests, so a losing concurrent writer fails on save instead of forking
    the rotation chain.
    """

    async def find_active_by_user_id(self, user_id: UUID) -> list[Session]:
        """Load a user's live sessions.

        Args:
            user_id: Owning user.

        Returns:
            Sessions with status ACTIVE that have not reached expires_at,
            each hydrated with its active token. Empty list if none.
        """
        ...

    async def find_session_for_refresh(self, digest: Digest) -> Session | None:
        """Load the session owning the token with this digest.

        The aggregate is hydrated with the presented token plus the session's
        current active token (which may be the same row).

        Args:
            digest: Digest of the presented refresh secret.

        Returns:
            Session if a token with this digest exists, None otherwise.
        """
        ...

    async def save(self, session: Session) -> Result[None, DomainError]:
        """Atomically upsert the session row and every loaded token row.

        Args:
            session: Aggregate to store.

        Returns:
            Success(None), or Failure(DomainError) on a constraint
            violation or storage failure. On success every entity in the
            aggregate is marked persisted.
        """
        ...
