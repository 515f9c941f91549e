"""Pydantic schemas for category endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    """Schema for creating a category. Blank names are rejected by the service."""

    name: str = ""


class CategoryUpdate(BaseModel):
    """Schema for renaming a category."""

    name: str = ""


class CategoryResponse(BaseModel):
    """Schema for category responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class CategoryListResponse(BaseModel):
    """List of categories, newest first."""

    categories: list[CategoryResponse]
