"""Application services shared by handlers."""

from sessionguard.application.services.session_lookup import find_client_session

__all__ = ["find_client_session"]
