"""Current-user profile endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from api.errors import to_http_exception
from core.config import Settings
from models.user import User
from schemas.user import UserResponse, UserUpdate
from services import user_service
from services.errors import ServiceError

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current authenticated user's info."""
    return current_user


@router.patch("", response_model=UserResponse)
async def edit_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Update the current user's profile.

    Only fields present in the body are changed. Returns 403 if the new email
    belongs to another account.
    """
    result = await user_service.edit_user(
        db, current_user, data, normalize_emails=settings.normalize_email,
    )
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return result
