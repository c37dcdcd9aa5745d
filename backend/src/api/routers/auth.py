"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_auth_service
from api.errors import to_http_exception
from core.tokens import AccessToken
from schemas.user import AuthRequest
from services.auth_service import AuthService
from services.errors import ServiceError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AccessToken, status_code=201)
async def signup(
    data: AuthRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_async_session),
) -> AccessToken:
    """
    Register a new account and return an access token.

    Returns 403 if the email is already registered.
    """
    result = await auth_service.signup(db, data)
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return result


@router.post("/signin", response_model=AccessToken)
async def signin(
    data: AuthRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_async_session),
) -> AccessToken:
    """
    Exchange email and password for an access token.

    Returns 403 with the same message for an unknown email or a wrong password.
    """
    result = await auth_service.signin(db, data)
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return result
