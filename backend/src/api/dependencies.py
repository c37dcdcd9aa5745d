"""FastAPI dependencies for injection."""
from fastapi import Request

from core.auth import get_current_user
from core.config import get_settings
from db.session import get_async_session
from services.auth_service import AuthService

__all__ = [
    "get_async_session",
    "get_auth_service",
    "get_current_user",
    "get_settings",
]


def get_auth_service(request: Request) -> AuthService:
    """Return the AuthService constructed for this application."""
    return request.app.state.auth_service
