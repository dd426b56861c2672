"""
Search module for token-based full-text search.

Provides FTS5 match-expression building, result models, and the search
engine querying the postings written at indexing time.
"""

from .query_parser import QueryParser
from .models import SearchResult
from .search_engine import SearchEngine

__all__ = [
    "QueryParser",
    "SearchResult",
    "SearchEngine"
]
