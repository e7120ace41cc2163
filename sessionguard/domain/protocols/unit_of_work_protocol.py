"""UnitOfWorkProtocol - atomic scope around repository writes."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol


class UnitOfWorkProtocol(Protocol):
    """Atomic scope for a use case.

    Usage:
        async with uow.atomic():
            result = await session_repo.save(session)
        # committed here; side effects (token issue) happen after
    """

    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic scope.

        Commits when the block exits normally. Rolls back and re-raises when
        the block raises.
        """
        ...
