"""SQLAlchemy models."""
from models.base import Base, CreatedAtMixin, JSONStringList, TimestampMixin
from models.category import Category  # Must be before bookmark due to foreign key
from models.bookmark import Bookmark

__all__ = [
    "Base",
    "Bookmark",
    "Category",
    "CreatedAtMixin",
    "JSONStringList",
    "TimestampMixin",
]
