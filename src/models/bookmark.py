"""Bookmark model for storing saved URLhaus records."""
from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, JSONStringList, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model - a normalized URL with threat metadata, tags, and notes.

    The unique constraint on url is case-sensitive; case-insensitive duplicate
    detection happens in the service layer before insert.
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("url", name="uq_bookmarks_url"),
        Index("idx_url", "url"),
        Index("idx_category_id", "category_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    threat: Mapped[str | None] = mapped_column(Text, nullable=True)
    reporter: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_added: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str] | None] = mapped_column(JSONStringList, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


# Listing is newest-first
Index("idx_created_at", Bookmark.created_at.desc())
