"""Category model for grouping bookmarks."""
from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, CreatedAtMixin


class Category(Base, CreatedAtMixin):
    """
    Category model - a user-defined label for bookmarks.

    Deleting a category leaves its bookmarks in place; the database clears their
    category_id (see Bookmark.category_id).
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
