"""ClockProtocol - injectable time source.

Domain and application code never read the system clock directly, so tests
can pin time.
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...
