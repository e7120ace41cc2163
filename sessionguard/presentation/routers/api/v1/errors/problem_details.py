"""RFC 9457 Problem Details for HTTP APIs.

Exports:
    ProblemDetails: Problem Details error response schema
"""

from pydantic import BaseModel, Field


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details error response.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/session_invalid",
        ...     title="Authentication Required",
        ...     status=401,
        ...     detail="Invalid session",
        ...     instance="/api/v1/tokens",
        ... )
    """

    type: str = Field(..., description="URI reference identifying the problem type")
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(..., description="URI reference identifying this occurrence")
