"""Client session lookup service.

Shared by login (to reuse a live session) and logout (to find the session
to end). A session belongs to the caller only when it is bound to the same
client and its active token verifies against the presented secret.

Architecture:
    - Application service (uses repositories, no persistence details)
    - Read-only; never changes session state
"""

from uuid import UUID

from sessionguard.domain.entities import Session
from sessionguard.domain.protocols import SessionRepository, TokenDigesterProtocol
from sessionguard.domain.value_objects import RefreshSecret


async def find_client_session(
    session_repo: SessionRepository,
    user_id: UUID,
    client_id: str,
    refresh_secret: RefreshSecret,
    digester: TokenDigesterProtocol,
) -> Session | None:
    """Find the user's live session on this client holding this secret.

    Args:
        session_repo: Session repository.
        user_id: Owning user.
        client_id: Client identifier from the fingerprint.
        refresh_secret: Secret presented by the client.
        digester: Digester used to verify the secret.

    Returns:
        Matching session, or None.
    """
    sessions = await session_repo.find_active_by_user_id(user_id)
    for session in sessions:
        if session.client_id != client_id:
            continue
        if session.has_active_refresh_token(refresh_secret.value, digester):
            return session
    return None
