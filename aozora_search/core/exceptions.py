"""
Custom exception hierarchy for Aozora Search.

Provides specific exception types for each failure mode of the pipeline:
fetching and parsing catalog pages, extracting archived texts, tokenizing,
and reading or writing the index.
"""


class AozoraSearchError(Exception):
    """Base exception for all Aozora Search errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AozoraSearchError):
    """Raised when configuration is invalid or missing."""
    pass


class FetchError(AozoraSearchError):
    """Raised when an HTTP fetch fails or returns a non-success status."""

    def __init__(
        self,
        message: str,
        url: str = None,
        status_code: int = None,
        details: dict = None
    ):
        """
        Initialize fetch error.

        Args:
            message: Error description.
            url: The URL that could not be fetched.
            status_code: HTTP status, if a response was received.
            details: Additional context.
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ParseError(AozoraSearchError):
    """Raised when a fetched page cannot be parsed as markup."""

    def __init__(self, message: str, url: str = None, details: dict = None):
        super().__init__(message, details)
        self.url = url


class MalformedURLError(AozoraSearchError):
    """Raised when a base page URL cannot be parsed."""

    def __init__(self, message: str, url: str = None, details: dict = None):
        super().__init__(message, details)
        self.url = url


class ExtractionError(AozoraSearchError):
    """Raised when text extraction from an archive fails."""

    def __init__(self, message: str, source: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            source: URL (or label) of the problematic archive.
            details: Additional context.
        """
        super().__init__(message, details)
        self.source = source


class ArchiveFormatError(ExtractionError):
    """Raised when fetched bytes are not a readable zip archive."""
    pass


class EncodingError(ExtractionError):
    """Raised when archived text is not valid in the source encoding."""
    pass


class ContentNotFoundError(ExtractionError):
    """Raised when an archive holds no plain-text member."""
    pass


class TokenizerError(AozoraSearchError):
    """Raised when the morphological analyzer cannot be initialized."""
    pass


class DatabaseError(AozoraSearchError):
    """Raised when SQLite operations fail."""
    pass


class StoreWriteError(DatabaseError):
    """Raised when persisting an entry fails, fully or partially."""

    def __init__(
        self,
        message: str,
        author_id: str = None,
        title_id: str = None,
        details: dict = None
    ):
        super().__init__(message, details)
        self.author_id = author_id
        self.title_id = title_id


class NotFoundError(AozoraSearchError):
    """Raised when a requested work is not in the store."""

    def __init__(
        self,
        message: str,
        author_id: str = None,
        title_id: str = None,
        details: dict = None
    ):
        super().__init__(message, details)
        self.author_id = author_id
        self.title_id = title_id


class SearchError(AozoraSearchError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query
