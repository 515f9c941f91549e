"""SQLAlchemy declarative base with common mixins and column types."""
import json
import logging
from datetime import UTC, datetime

from sqlalchemy import DateTime, Text, func
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CreatedAtMixin:
    """
    Mixin that adds a created_at column.

    Set client-side so rows created within the same second still order correctly
    on SQLite, whose CURRENT_TIMESTAMP has one-second resolution. The server default
    covers rows inserted outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """Mixin that adds created_at and updated_at columns."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
        nullable=False,
    )


class JSONStringList(TypeDecorator):
    """
    Ordered list of strings stored as JSON text.

    None is stored as NULL and read back as None, so "no tags given" stays distinct
    from an empty list. Stored values that are not a JSON array of strings read back
    as an empty list instead of failing the query.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str | None:  # noqa: ARG002
        """Serialize the list for storage."""
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str] | None:  # noqa: ARG002
        """Deserialize stored JSON, degrading malformed content to an empty list."""
        if value is None:
            return None
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("malformed_tags_column", extra={"reason": "invalid_json"})
            return []
        if not isinstance(parsed, list) or not all(isinstance(t, str) for t in parsed):
            logger.warning("malformed_tags_column", extra={"reason": "not_a_string_list"})
            return []
        return parsed
