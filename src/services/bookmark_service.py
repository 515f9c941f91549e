"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utc_now
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkBase, BookmarkCreate, BookmarkUpdate
from services.category_service import ensure_category_exists
from services.exceptions import (
    BookmarkNotFoundError,
    DuplicateUrlError,
    MissingUrlError,
    StorageError,
)
from services.url_validator import sanitize_url, validate_url

logger = logging.getLogger(__name__)

# Name of the unique constraint on bookmarks.url, and SQLite's wording for it
URL_UNIQUE_CONSTRAINT = "uq_bookmarks_url"
SQLITE_URL_UNIQUE_MESSAGE = "UNIQUE constraint failed: bookmarks.url"


def is_url_conflict(error: IntegrityError) -> bool:
    """Whether an IntegrityError came from the bookmarks.url unique constraint."""
    message = str(error)
    return URL_UNIQUE_CONSTRAINT in message or SQLITE_URL_UNIQUE_MESSAGE in message


def prepare_url(url: str | None) -> str:
    """
    Validate a submitted URL and return its sanitized form.

    Raises:
        MissingUrlError: If no URL was given.
        UrlValidationError: The specific validation failure.
    """
    if url is None or url == "":
        raise MissingUrlError()
    result = validate_url(url)
    if result.error is not None:
        raise result.error
    return sanitize_url(url)


async def find_bookmark_by_url(
    db: AsyncSession,
    url: str,
    exclude_id: int | None = None,
) -> Bookmark | None:
    """Find a bookmark whose stored URL matches url ignoring case."""
    stmt = select(Bookmark).where(func.lower(Bookmark.url) == url.lower())
    if exclude_id is not None:
        stmt = stmt.where(Bookmark.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


def _field_values(data: BookmarkBase, url: str) -> dict:
    """Column values for a full write of the mutable bookmark fields."""
    return {
        "url": url,
        "threat": data.threat,
        "reporter": data.reporter,
        "date_added": data.date_added,
        "status": data.status,
        "tags": data.tags,
        "notes": data.notes,
        "category_id": data.category_id,
    }


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Save a new bookmark.

    Flow:
    1. Require and validate the URL, then sanitize it (trim + normalize)
    2. Reject the URL if any bookmark already has it, ignoring case
    3. Check the category reference
    4. Insert; a concurrent duplicate caught by the unique constraint is still
       reported as DuplicateUrlError

    Raises:
        MissingUrlError: If no URL was given.
        UrlValidationError: If the URL is invalid.
        DuplicateUrlError: If the URL is already bookmarked.
        CategoryNotFoundError: If category_id does not exist.
        StorageError: On any other database failure.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    url = prepare_url(data.url)

    try:
        if await find_bookmark_by_url(db, url) is not None:
            logger.info("bookmark_duplicate_url", extra={"url": url})
            raise DuplicateUrlError(url)

        if data.category_id is not None:
            await ensure_category_exists(db, data.category_id)

        bookmark = Bookmark(**_field_values(data, url))
        try:
            async with db.begin_nested():  # Savepoint keeps the request transaction usable
                db.add(bookmark)
                await db.flush()
        except IntegrityError as e:
            # Race: another writer inserted the same URL after our pre-check
            if is_url_conflict(e):
                logger.info("bookmark_duplicate_url", extra={"url": url, "source": "constraint"})
                raise DuplicateUrlError(url) from e
            raise
        await db.refresh(bookmark)
    except SQLAlchemyError as e:
        raise StorageError("save bookmark", str(e)) from e

    logger.info("bookmark_created", extra={"bookmark_id": bookmark.id})
    return bookmark


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Get a bookmark by ID. Returns None if not found."""
    try:
        result = await db.execute(
            select(Bookmark)
            .where(Bookmark.id == bookmark_id)
            # category_id may have been cleared by the database on category delete
            .execution_options(populate_existing=True),
        )
    except SQLAlchemyError as e:
        raise StorageError("fetch bookmark", str(e)) from e
    return result.scalar_one_or_none()


async def list_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Get all bookmarks, newest first."""
    try:
        result = await db.execute(
            select(Bookmark)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .execution_options(populate_existing=True),
        )
    except SQLAlchemyError as e:
        raise StorageError("fetch bookmarks", str(e)) from e
    return list(result.scalars().all())


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Replace all mutable fields of a bookmark.

    Fields left out of `data` are stored as null.

    Flow (all inside one savepoint, rolled back on any failure):
    1. Touch the row; an affected-row count of 0 means the bookmark does not
       exist, so a missing id is reported as NotFound before any input error
    2. Require, validate and sanitize the URL
    3. Reject the URL if another bookmark already has it, ignoring case
    4. Check the category reference
    5. Write the new field values

    Raises:
        BookmarkNotFoundError: If no bookmark has bookmark_id.
        MissingUrlError / UrlValidationError: If the URL is missing or invalid.
        DuplicateUrlError: If another bookmark already has the URL.
        CategoryNotFoundError: If category_id does not exist.
        StorageError: On any other database failure.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    url = None
    try:
        try:
            async with db.begin_nested():
                touched = await db.execute(
                    update(Bookmark)
                    .where(Bookmark.id == bookmark_id)
                    .values(updated_at=utc_now())
                    .execution_options(synchronize_session=False),
                )
                if touched.rowcount == 0:
                    raise BookmarkNotFoundError(bookmark_id)

                url = prepare_url(data.url)
                if await find_bookmark_by_url(db, url, exclude_id=bookmark_id) is not None:
                    logger.info("bookmark_duplicate_url", extra={"url": url})
                    raise DuplicateUrlError(url)

                if data.category_id is not None:
                    await ensure_category_exists(db, data.category_id)

                await db.execute(
                    update(Bookmark)
                    .where(Bookmark.id == bookmark_id)
                    .values(**_field_values(data, url), updated_at=utc_now()),
                )
        except IntegrityError as e:
            # Race: another writer stored the same URL after our pre-check
            if url is not None and is_url_conflict(e):
                raise DuplicateUrlError(url) from e
            raise
    except SQLAlchemyError as e:
        raise StorageError("update bookmark", str(e)) from e

    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("bookmark_updated", extra={"bookmark_id": bookmark_id})
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> None:
    """
    Delete a bookmark.

    Raises:
        BookmarkNotFoundError: If no row was deleted.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    try:
        result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
    except SQLAlchemyError as e:
        raise StorageError("delete bookmark", str(e)) from e
    if result.rowcount == 0:
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("bookmark_deleted", extra={"bookmark_id": bookmark_id})
