"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising. Handlers,
repositories, and the Session aggregate all report expected failures this way.

Usage:
    def rotate(...) -> Result[RefreshToken, SessionError]:
        if not session.is_active():
            return Failure(error=SessionNotActiveError(session_id=session.id))
        return Success(value=new_token)

    match result:
        case Success(value=token):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
