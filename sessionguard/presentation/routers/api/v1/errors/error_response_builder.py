"""Error response builder for RFC 9457 Problem Details.

Converts DomainError values returned by handlers into JSON responses.

Every authentication failure (bad credentials, dead session, reuse
detection, bad access token) is reported as the same 401 "unauthorized"
response. The precise code is left to the logs.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from sessionguard.core.config import settings
from sessionguard.core.errors import DomainError
from sessionguard.infrastructure.errors import DatabaseError
from sessionguard.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error, request)
    """

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a DomainError to an RFC 9457 JSON response.

        Args:
            error: Error returned by a handler.
            request: FastAPI Request object (for instance URL).

        Returns:
            JSONResponse with ProblemDetails content.
        """
        if error.is_unauthorized:
            status_code = status.HTTP_401_UNAUTHORIZED
            problem_type = "unauthorized"
            title = "Authentication Required"
            detail = "Unauthorized"
        elif isinstance(error, DatabaseError) and error.is_conflict:
            status_code = status.HTTP_409_CONFLICT
            problem_type = error.code.value
            title = "Resource Conflict"
            detail = "The request conflicted with a concurrent request. Try again."
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            problem_type = error.code.value
            title = "Internal Server Error"
            detail = "An unexpected error occurred"

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{problem_type}",
            title=title,
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
        )
        headers = {"WWW-Authenticate": "Bearer"} if error.is_unauthorized else None
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(),
            headers=headers,
        )
