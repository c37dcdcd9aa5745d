"""
Service layer for bookmark CRUD operations.

Every operation is scoped to the caller's user ID. A bookmark that exists but
belongs to another user is reported exactly like one that does not exist
(`not_found`), for reads and for writes, so callers cannot probe other users' IDs.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.errors import ServiceError, not_found

logger = logging.getLogger(__name__)


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by the user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        link=str(data.link),
        description=data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def get_bookmarks(
    db: AsyncSession,
    user_id: int,
) -> list[Bookmark]:
    """Get all bookmarks for a user in insertion order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id),
    )
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | ServiceError:
    """Get a bookmark by ID, scoped to user. Returns not_found if missing or wrong user."""
    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    bookmark = result.scalar_one_or_none()
    if bookmark is None:
        return not_found("Bookmark")
    return bookmark


async def _get_owned_for_write(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | ServiceError:
    """Load a bookmark by ID alone, then check the owner before any mutation."""
    bookmark = await db.get(Bookmark, bookmark_id)
    if bookmark is None:
        return not_found("Bookmark")
    if bookmark.user_id != user_id:
        logger.warning(
            "User %s attempted to modify bookmark %s owned by another user",
            user_id,
            bookmark_id,
        )
        return not_found("Bookmark")
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark | ServiceError:
    """
    Apply a partial update to a bookmark the user owns.

    Only fields present in the request are changed. The owner never changes.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await _get_owned_for_write(db, user_id, bookmark_id)
    if isinstance(bookmark, ServiceError):
        return bookmark

    update_data = data.model_dump(exclude_unset=True)
    if "link" in update_data:
        update_data["link"] = str(update_data["link"])
    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> ServiceError | None:
    """
    Delete a bookmark the user owns. Returns None on success.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await _get_owned_for_write(db, user_id, bookmark_id)
    if isinstance(bookmark, ServiceError):
        return bookmark

    await db.delete(bookmark)
    await db.flush()
    return None
