"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from services.threats import classify_threat


def empty_to_none(value: object) -> object:
    """Treat empty or whitespace-only strings as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class BookmarkBase(BaseModel):
    """
    Fields shared by create and update.

    `url` is optional at the schema level so a missing URL surfaces as the
    service's MissingUrlError rather than a generic validation error.
    """

    url: str | None = None
    threat: str | None = None
    reporter: str | None = None
    date_added: str | None = None
    status: str | None = None
    tags: list[str] | None = None
    notes: str | None = None
    category_id: int | None = None

    @field_validator("threat", "reporter", "date_added", "status", "notes", mode="before")
    @classmethod
    def blank_text_to_none(cls, v: object) -> object:
        """Store blank optional text as null."""
        return empty_to_none(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def zero_category_to_none(cls, v: object) -> object:
        """Category ids start at 1; 0 and blank mean uncategorized."""
        if v == 0:
            return None
        return empty_to_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def strip_tags(cls, v: object) -> object:
        """Trim tags and drop blank entries, keeping order."""
        if not isinstance(v, list):
            return v
        # Non-string entries are left for type validation to reject
        return [
            t.strip() if isinstance(t, str) else t
            for t in v
            if not isinstance(t, str) or t.strip()
        ]


class BookmarkCreate(BookmarkBase):
    """Schema for saving a feed record as a bookmark."""


class BookmarkUpdate(BookmarkBase):
    """
    Schema for updating a bookmark.

    This is a full replace: any optional field left out is stored as null.
    """


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int | None
    url: str
    threat: str | None
    reporter: str | None
    date_added: str | None
    status: str | None
    tags: list[str] | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def threat_family(self) -> str:
        """Coarse threat family derived from the threat label."""
        return classify_threat(self.threat)


class BookmarkListResponse(BaseModel):
    """List of bookmarks, newest first."""

    bookmarks: list[BookmarkResponse]
