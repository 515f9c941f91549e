"""
Error response schemas for API endpoints.

Provides structured error responses for OpenAPI documentation and consistent
error handling across the API.
"""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned for every handled failure."""

    detail: str
    error: str


BOOKMARK_WRITE_ERRORS: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid URL"},
    404: {"model": ErrorResponse, "description": "Bookmark or category not found"},
    409: {"model": ErrorResponse, "description": "URL already bookmarked"},
}

NOT_FOUND_ERRORS: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "Not found"},
}

CATEGORY_WRITE_ERRORS: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Category name is required"},
    404: {"model": ErrorResponse, "description": "Category not found"},
}

FEED_ERRORS: dict[int | str, dict] = {
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "Upstream feed failed"},
    503: {"model": ErrorResponse, "description": "Feed not configured"},
}
