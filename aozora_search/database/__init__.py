"""
Database module for SQLite persistence with FTS5 full-text search.

Provides connection management, schema definitions, and the repository
storing authors, works and their segmented words.
"""

from .connection import get_connection, get_cursor, use_database, DatabaseManager
from .schema import init_schema, reset_schema, get_statistics
from .repository import ContentRepository, Author, Title

__all__ = [
    "get_connection",
    "get_cursor",
    "use_database",
    "DatabaseManager",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "ContentRepository",
    "Author",
    "Title"
]
