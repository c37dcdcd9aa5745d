"""Service layer for user profile operations."""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.auth_service import is_email_conflict, normalize_email
from services.errors import ServiceError, credentials_taken


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by ID. Returns None if the user does not exist."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def edit_user(
    db: AsyncSession,
    user: User,
    data: UserUpdate,
    normalize_emails: bool = False,
) -> User | ServiceError:
    """
    Apply a partial profile update to the user.

    Only fields present in the request are changed. Changing the email to one that
    another account already uses returns a `credentials_taken` error.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    update_data = data.model_dump(exclude_unset=True)
    if normalize_emails and "email" in update_data:
        update_data["email"] = normalize_email(update_data["email"])

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        if is_email_conflict(e):
            return credentials_taken()
        raise
    await db.refresh(user)
    return user
