"""Bookmark CRUD endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from api.errors import to_http_exception
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service
from services.errors import ServiceError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

# Ids are 32-bit INTEGER primary keys
BookmarkId = Annotated[int, Path(ge=1, le=2**31 - 1)]


@router.post("/", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark owned by the current user."""
    bookmark = await bookmark_service.create_bookmark(db, current_user.id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.get("/", response_model=list[BookmarkResponse])
async def list_bookmarks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List the current user's bookmarks in creation order."""
    bookmarks = await bookmark_service.get_bookmarks(db, current_user.id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    result = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return BookmarkResponse.model_validate(result)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: BookmarkId,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Update a bookmark. Only fields present in the body are changed."""
    result = await bookmark_service.update_bookmark(
        db, current_user.id, bookmark_id, data,
    )
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return BookmarkResponse.model_validate(result)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    error = await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)
    if error is not None:
        raise to_http_exception(error)
