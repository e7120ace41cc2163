"""Session request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

The refresh secret never appears in a body; it travels only in the
HttpOnly refresh cookie.

RESTful Endpoints:
    POST   /api/v1/sessions           - Create session (login)
    DELETE /api/v1/sessions/current   - Delete session (logout)
    DELETE /api/v1/sessions           - Delete all sessions (logout everywhere)
    POST   /api/v1/tokens             - Create tokens (refresh)
"""

from pydantic import BaseModel, ConfigDict, Field

from sessionguard.domain.types import Email


# =============================================================================
# Login
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (login).

    POST /api/v1/sessions
    Returns: 201 Created
    """

    email: Email
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User's password",
        examples=["SecurePass123!"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "SecurePass123!",
            }
        }
    )


class SessionCreateResponse(BaseModel):
    """Response schema for session creation (201 Created)."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


# =============================================================================
# Logout
# =============================================================================


class SessionRevokeAllResponse(BaseModel):
    """Response schema for revoking every session of the caller."""

    revoked_count: int = Field(..., description="Number of sessions revoked")


# =============================================================================
# Refresh
# =============================================================================


class TokenCreateResponse(BaseModel):
    """Response schema for token refresh (201 Created).

    The rotated refresh secret is set in the refresh cookie.
    """

    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
