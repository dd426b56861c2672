"""
Token search engine using SQLite FTS5.

Segments the query text with the same tokenizer used at indexing time and
matches the resulting token set against the stored postings.
"""

import sqlite3
import time
from typing import List, Optional

from ..core import get_config, get_logger, SearchError
from ..database import get_connection
from ..tokenizer import Tokenizer
from .models import SearchResult
from .query_parser import QueryParser

logger = get_logger(__name__)


class SearchEngine:
    """
    Full-text search over stored works.

    A work matches when its postings contain every searchable token of the
    query (token-set containment, not substring match). Results come back
    in FTS5 rank order; callers should not rely on any particular order.
    """

    def __init__(self, tokenizer: Tokenizer = None):
        """
        Initialize the search engine with configuration.

        Args:
            tokenizer: Segmenter for query text. Must match the one used
                       at indexing time. Defaults to a configured Tokenizer.
        """
        self.config = get_config()
        self.tokenizer = tokenizer or Tokenizer()
        self.parser = QueryParser()

        self.default_limit = self.config.search.default_limit

    def query(self, text: str, limit: Optional[int] = None) -> List[SearchResult]:
        """
        Find works containing every token of the query text.

        Args:
            text: Query text, segmented before matching.
            limit: Maximum number of results. None or 0 falls back to the
                   configured default, where 0 means all matches.

        Returns:
            List of SearchResult. Empty if the query has no searchable token.

        Raises:
            SearchError: If query execution fails.
        """
        start_time = time.time()

        match_expression = self.parser.build_match(self.tokenizer.segment(text))

        if not match_expression:
            return []

        limit = limit or self.default_limit or -1

        try:
            results = self._execute_search(match_expression, limit)
        except sqlite3.Error as e:
            logger.error(f"Search failed: {e}")
            raise SearchError(
                f"Search execution failed: {e}",
                query=text,
                details={"match": match_expression}
            )

        execution_time = (time.time() - start_time) * 1000
        logger.debug(
            f"Search {text!r} ({match_expression}): "
            f"{len(results)} results in {execution_time:.1f}ms"
        )

        return results

    def _execute_search(self, match_expression: str, limit: int) -> List[SearchResult]:
        """Execute the FTS5 search query."""
        sql = """
            SELECT
                a.author_id,
                a.author,
                c.title_id,
                c.title,
                bm25(contents_fts) as score
            FROM contents_fts
            JOIN contents c ON contents_fts.rowid = c.id
            JOIN authors a ON a.author_id = c.author_id
            WHERE contents_fts MATCH ?
            ORDER BY score
            LIMIT ?
        """

        with get_connection() as conn:
            rows = conn.execute(sql, (match_expression, limit)).fetchall()

        return [
            SearchResult(
                author_id=row["author_id"],
                author=row["author"],
                title_id=row["title_id"],
                title=row["title"],
                score=row["score"]
            )
            for row in rows
        ]
