"""
Exceptions for bookmark store operations.

Every error carries a stable `kind` so callers can map it to a response without
matching on messages.
"""


class BookmarkStoreError(Exception):
    """Base class for all bookmark store errors."""

    kind = "StoreError"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UrlValidationError(BookmarkStoreError):
    """Raised when a URL fails validation. Always user-correctable."""

    kind = "InvalidURL"


class EmptyUrlError(UrlValidationError):
    """Raised when the URL is blank after trimming."""

    kind = "EmptyURL"

    def __init__(self) -> None:
        super().__init__("URL cannot be empty")


class UrlTooLongError(UrlValidationError):
    """Raised when the URL exceeds the maximum length."""

    kind = "TooLong"

    def __init__(self, max_length: int) -> None:
        self.max_length = max_length
        super().__init__(f"URL is too long (max {max_length} characters)")


class MalformedUrlError(UrlValidationError):
    """Raised when the input cannot be parsed as an absolute URL."""

    kind = "MalformedURL"

    def __init__(self) -> None:
        super().__init__("Invalid URL format")


class UnsupportedSchemeError(UrlValidationError):
    """Raised when the URL scheme is not http or https."""

    kind = "UnsupportedScheme"

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__("Only HTTP and HTTPS protocols are supported")


class MissingHostError(UrlValidationError):
    """Raised when the URL has no hostname."""

    kind = "MissingHost"

    def __init__(self) -> None:
        super().__init__("URL must have a valid hostname")


class MissingUrlError(BookmarkStoreError):
    """Raised when a bookmark is saved without a URL."""

    kind = "MissingURL"

    def __init__(self) -> None:
        super().__init__("URL is required")


class EmptyNameError(BookmarkStoreError):
    """Raised when a category name is blank after trimming."""

    kind = "EmptyName"

    def __init__(self) -> None:
        super().__init__("Category name is required")


class DuplicateUrlError(BookmarkStoreError):
    """Raised when a bookmark with the same URL already exists."""

    kind = "DuplicateURL"

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("URL already bookmarked")


class NotFoundError(BookmarkStoreError):
    """Raised when an operation targets an id that does not exist."""

    kind = "NotFound"

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark id does not exist."""

    def __init__(self, bookmark_id: int) -> None:
        super().__init__("Bookmark", bookmark_id)


class CategoryNotFoundError(NotFoundError):
    """Raised when a category id does not exist."""

    def __init__(self, category_id: int) -> None:
        super().__init__("Category", category_id)


class StorageError(BookmarkStoreError):
    """
    Raised for unexpected database errors not covered by a specific kind.

    `detail` keeps the underlying error text for logs; the message is safe to show users.
    """

    kind = "StorageFailure"

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Failed to {operation}")
