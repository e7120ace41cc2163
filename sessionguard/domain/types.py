"""Annotated types with centralized validation.

Usage:
    from sessionguard.domain.types import Email

    class SessionCreateRequest(BaseModel):
        email: Email  # validated and normalized
"""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, Field


def normalize_email(v: str) -> str:
    """Validate an email address and return its normalized form.

    Args:
        v: Raw email address.

    Returns:
        str: Normalized address with a lowercase domain and local part.

    Raises:
        ValueError: If the address is not a valid email.
    """
    try:
        validated = validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email: {e}") from e
    return validated.normalized.lower()


Email = Annotated[
    str,
    Field(
        min_length=3,
        max_length=255,
        description="Email address",
        examples=["user@example.com"],
    ),
    AfterValidator(normalize_email),
]
"""Email address with validation and lowercase normalization."""
