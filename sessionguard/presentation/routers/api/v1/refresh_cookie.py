"""Refresh cookie and client fingerprint helpers.

The refresh secret travels only in an HttpOnly cookie, hex encoded, that
expires with the session. Responses carrying it must not be cached.
"""

import ipaddress
from datetime import datetime

from fastapi import Request, Response

from sessionguard.application.dtos import ClientFingerprint
from sessionguard.core.config import settings
from sessionguard.domain.value_objects import RefreshSecret

CLIENT_ID_HEADER = "X-Client-ID"
DEFAULT_CLIENT_ID = "default"


def read_refresh_secret(request: Request) -> RefreshSecret | None:
    """Decode the refresh cookie.

    Returns:
        The secret, or None if the cookie is absent or malformed.
    """
    encoded = request.cookies.get(settings.refresh_cookie_name)
    if not encoded:
        return None
    try:
        return RefreshSecret.from_hex(encoded)
    except ValueError:
        return None


def set_refresh_cookie(
    response: Response, secret: RefreshSecret, expires_at: datetime
) -> None:
    """Set the refresh cookie and disable caching of the response."""
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=secret.hex(),
        expires=expires_at,
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
        path=settings.api_v1_prefix,
    )
    response.headers["Cache-Control"] = "no-store"
    response.headers["Pragma"] = "no-cache"


def clear_refresh_cookie(response: Response) -> None:
    """Remove the refresh cookie from the client."""
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
        path=settings.api_v1_prefix,
    )


def client_fingerprint(request: Request) -> ClientFingerprint:
    """Build the client fingerprint from request headers.

    The IP is the first X-Forwarded-For entry when it parses as an IP
    address (the app runs behind a reverse proxy), else the socket peer.
    """
    peer = request.client.host if request.client else None
    forwarded_for = request.headers.get("x-forwarded-for")
    ip = _parse_ip(forwarded_for.split(",")[0]) if forwarded_for else None

    return ClientFingerprint(
        client_id=request.headers.get(CLIENT_ID_HEADER) or DEFAULT_CLIENT_ID,
        ip=ip or _parse_ip(peer),
        user_agent=request.headers.get("user-agent"),
    )


def _parse_ip(value: str | None) -> str | None:
    """Normalize an IP address string; None if it is not one."""
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None
