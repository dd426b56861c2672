"""
Data models for search functionality.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class SearchResult:
    """
    Represents a single search result.

    Attributes:
        author_id: Author identifier.
        author: Author display name.
        title_id: Work identifier.
        title: Work title.
        score: BM25 relevance score (lower is better in SQLite FTS5).
    """
    author_id: str
    author: str
    title_id: str
    title: str
    score: float = 0.0

    def as_tuple(self) -> Tuple[str, str, str, str]:
        """Return (author_id, author, title_id, title)."""
        return self.author_id, self.author, self.title_id, self.title
