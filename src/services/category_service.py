"""Service layer for category CRUD operations."""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import Category
from services.exceptions import CategoryNotFoundError, EmptyNameError, StorageError

logger = logging.getLogger(__name__)


def clean_name(name: str | None) -> str:
    """Trim a category name, rejecting blank names."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise EmptyNameError()
    return cleaned


async def get_category(db: AsyncSession, category_id: int) -> Category | None:
    """Get a category by ID. Returns None if not found."""
    try:
        result = await db.execute(select(Category).where(Category.id == category_id))
    except SQLAlchemyError as e:
        raise StorageError("fetch category", str(e)) from e
    return result.scalar_one_or_none()


async def ensure_category_exists(db: AsyncSession, category_id: int) -> None:
    """Raise CategoryNotFoundError unless category_id refers to a category."""
    if await get_category(db, category_id) is None:
        raise CategoryNotFoundError(category_id)


async def list_categories(db: AsyncSession) -> list[Category]:
    """Get all categories, newest first."""
    try:
        result = await db.execute(
            select(Category).order_by(Category.created_at.desc(), Category.id.desc()),
        )
    except SQLAlchemyError as e:
        raise StorageError("fetch categories", str(e)) from e
    return list(result.scalars().all())


async def create_category(db: AsyncSession, name: str | None) -> Category:
    """
    Create a category with the trimmed name.

    Raises:
        EmptyNameError: If the name is blank.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    category = Category(name=clean_name(name))
    db.add(category)
    try:
        await db.flush()
        await db.refresh(category)
    except SQLAlchemyError as e:
        raise StorageError("create category", str(e)) from e
    logger.info("category_created", extra={"category_id": category.id})
    return category


async def rename_category(db: AsyncSession, category_id: int, name: str | None) -> Category:
    """
    Rename a category.

    Raises:
        EmptyNameError: If the new name is blank.
        CategoryNotFoundError: If no row was updated.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    cleaned = clean_name(name)
    try:
        result = await db.execute(
            update(Category).where(Category.id == category_id).values(name=cleaned),
        )
    except SQLAlchemyError as e:
        raise StorageError("update category", str(e)) from e
    if result.rowcount == 0:
        raise CategoryNotFoundError(category_id)

    category = await get_category(db, category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """
    Delete a category.

    Bookmarks in the category are kept; the foreign key's ON DELETE SET NULL
    makes them uncategorized.

    Raises:
        CategoryNotFoundError: If no row was deleted.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    try:
        result = await db.execute(delete(Category).where(Category.id == category_id))
    except SQLAlchemyError as e:
        raise StorageError("delete category", str(e)) from e
    if result.rowcount == 0:
        raise CategoryNotFoundError(category_id)
    logger.info("category_deleted", extra={"category_id": category_id})
