"""Category CRUD endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from schemas.errors import CATEGORY_WRITE_ERRORS, NOT_FOUND_ERRORS
from services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=CategoryListResponse)
async def list_categories(
    db: AsyncSession = Depends(get_async_session),
) -> CategoryListResponse:
    """List all categories, newest first."""
    categories = await category_service.list_categories(db)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.post("/", response_model=CategoryResponse, status_code=201, responses=CATEGORY_WRITE_ERRORS)
async def create_category(
    data: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """Create a category."""
    category = await category_service.create_category(db, data.name)
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse, responses=CATEGORY_WRITE_ERRORS)
async def rename_category(
    category_id: int,
    data: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """Rename a category."""
    category = await category_service.rename_category(db, category_id, data.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204, responses=NOT_FOUND_ERRORS)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a category. Its bookmarks are kept and become uncategorized."""
    await category_service.delete_category(db, category_id)
