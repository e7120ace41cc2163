"""RFC 9457 error responses."""

from sessionguard.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from sessionguard.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)

__all__ = ["ErrorResponseBuilder", "ProblemDetails"]
