"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from schemas.errors import BOOKMARK_WRITE_ERRORS, NOT_FOUND_ERRORS
from services import bookmark_service
from services.exceptions import BookmarkNotFoundError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=BookmarkListResponse)
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """List all bookmarks, newest first."""
    bookmarks = await bookmark_service.list_bookmarks(db)
    return BookmarkListResponse(
        bookmarks=[BookmarkResponse.model_validate(b) for b in bookmarks],
    )


@router.post(
    "/",
    response_model=BookmarkResponse,
    status_code=201,
    responses=BOOKMARK_WRITE_ERRORS,
)
async def create_bookmark(
    data: BookmarkCreate,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Save a feed record as a bookmark.

    The URL is trimmed and normalized before storage. Saving a URL that is already
    bookmarked (ignoring case) returns 409.
    """
    bookmark = await bookmark_service.create_bookmark(db, data)
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse, responses=NOT_FOUND_ERRORS)
async def get_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse, responses=BOOKMARK_WRITE_ERRORS)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Replace a bookmark's fields. Omitted optional fields are cleared."""
    bookmark = await bookmark_service.update_bookmark(db, bookmark_id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204, responses=NOT_FOUND_ERRORS)
async def delete_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, bookmark_id)
