"""Unit tests for Result types and core errors.

Tests cover:
- Success/Failure construction and pattern matching
- DomainError string form and unauthorized flag
- AuthenticationError subclasses report unauthorized
- AggregateError collects nested errors
"""

import pytest

from sessionguard.core.enums import ErrorCode
from sessionguard.core.errors import (
    AggregateError,
    AuthenticationError,
    DomainError,
    ValidationError,
)
from sessionguard.core.result import Failure, Success
from sessionguard.domain.errors import InvalidSessionError, SessionExpiredError


@pytest.mark.unit
class TestResult:
    """Test Success and Failure."""

    def test_pattern_matching(self):
        """Test results destructure by keyword in match statements."""
        outcomes = []
        for result in (Success(value=1), Failure(error="boom")):
            match result:
                case Success(value=value):
                    outcomes.append(("ok", value))
                case Failure(error=error):
                    outcomes.append(("err", error))

        assert outcomes == [("ok", 1), ("err", "boom")]

    def test_results_are_immutable(self):
        result = Success(value=1)

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_equality_by_value(self):
        assert Success(value=3) == Success(value=3)
        assert Failure(error="x") != Success(value="x")


@pytest.mark.unit
class TestDomainErrors:
    """Test core error types."""

    def test_domain_error_is_not_exception(self):
        error = DomainError(code=ErrorCode.VALIDATION_FAILED, message="bad")

        assert not isinstance(error, Exception)
        assert str(error) == "validation_failed: bad"
        assert error.is_unauthorized is False

    def test_validation_error_keeps_field(self):
        error = ValidationError(
            code=ErrorCode.INVALID_EMAIL, message="Invalid email", field="email"
        )

        assert error.field == "email"
        assert error.is_unauthorized is False

    def test_authentication_errors_are_unauthorized(self):
        """Test every authentication error subclass reports unauthorized."""
        errors = [
            AuthenticationError(code=ErrorCode.TOKEN_INVALID, message="bad"),
            SessionExpiredError(),
            InvalidSessionError(cause="other device"),
        ]

        assert all(error.is_unauthorized for error in errors)

    def test_aggregate_error_lists_nested_codes(self):
        nested = (
            DomainError(code=ErrorCode.PERSISTENCE_FAILED, message="a"),
            DomainError(code=ErrorCode.RESOURCE_CONFLICT, message="b"),
        )

        error = AggregateError(errors=nested)

        assert error.code == ErrorCode.MULTIPLE_ERRORS
        assert error.errors == nested
        assert str(error) == (
            "multiple_errors: One or more operations failed "
            "[persistence_failed, resource_conflict]"
        )
