"""API v1 routers.

Resources:
    /api/v1/sessions - Session management (login/logout)
    /api/v1/tokens   - Token management (refresh)
"""

from fastapi import APIRouter

from sessionguard.core.config import settings
from sessionguard.presentation.routers.api.v1.sessions import router as sessions_router
from sessionguard.presentation.routers.api.v1.tokens import router as tokens_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(sessions_router)
v1_router.include_router(tokens_router)

__all__ = [
    "v1_router",
]
