"""
Content repository for the authors, contents and postings tables.

Stores a work together with its author and segmented words in one
transaction, and reads works back for the search tool.
"""

import sqlite3
from dataclasses import dataclass
from typing import List

from ..core import get_logger, DatabaseError, StoreWriteError, NotFoundError
from ..crawler.models import Entry
from ..tokenizer import Tokenizer
from .connection import get_connection, get_cursor

logger = get_logger(__name__)


@dataclass
class Author:
    """An author row."""
    author_id: str
    author: str


@dataclass
class Title:
    """A work of an author, without its text."""
    author_id: str
    title_id: str
    title: str


class ContentRepository:
    """
    Repository for stored works and their postings.

    put() replaces a work's text and postings in a single transaction, so
    a re-ingested work never keeps tokens from its previous text.
    """

    def __init__(self, tokenizer: Tokenizer = None):
        """
        Initialize the repository.

        Args:
            tokenizer: Segmenter for indexed text. Created on first put()
                       when omitted, so read-only use never loads MeCab.
        """
        self._tokenizer = tokenizer

    @property
    def tokenizer(self) -> Tokenizer:
        if self._tokenizer is None:
            self._tokenizer = Tokenizer()
        return self._tokenizer

    def put(self, entry: Entry, text: str) -> int:
        """
        Store a work, replacing any previous version.

        Upserts the author row and the content row, then swaps the
        postings for the space-joined tokens of the new text.

        Args:
            entry: Discovered work.
            text: Decoded text of the work.

        Returns:
            Row ID of the content row.

        Raises:
            StoreWriteError: If any write fails. The transaction is rolled
                             back, so nothing of the entry is persisted.
            DatabaseError: If the database cannot be opened.
        """
        tokens = self.tokenizer.segment(text)
        words = " ".join(tokens)

        try:
            with get_cursor() as cur:
                cur.execute("""
                    INSERT INTO authors (author_id, author)
                    VALUES (?, ?)
                    ON CONFLICT(author_id) DO UPDATE SET author = excluded.author
                """, (entry.author_id, entry.author))

                cur.execute("""
                    INSERT INTO contents
                    (author_id, title_id, title, content, site_url, zip_url)
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(author_id, title_id) DO UPDATE SET
                        title = excluded.title,
                        content = excluded.content,
                        site_url = excluded.site_url,
                        zip_url = excluded.zip_url,
                        indexed_at = CURRENT_TIMESTAMP
                """, (
                    entry.author_id,
                    entry.title_id,
                    entry.title,
                    text,
                    entry.site_url,
                    entry.zip_url
                ))

                row = cur.execute(
                    "SELECT id FROM contents WHERE author_id = ? AND title_id = ?",
                    (entry.author_id, entry.title_id)
                ).fetchone()
                content_id = row["id"]

                cur.execute("DELETE FROM contents_fts WHERE rowid = ?", (content_id,))
                cur.execute(
                    "INSERT INTO contents_fts (rowid, words) VALUES (?, ?)",
                    (content_id, words)
                )

        except sqlite3.Error as e:
            raise StoreWriteError(
                f"Failed to store {entry.author_id}/{entry.title_id}: {e}",
                author_id=entry.author_id,
                title_id=entry.title_id
            )

        logger.debug(
            f"Stored {entry.author_id}/{entry.title_id} "
            f"({len(text):,} chars, {len(tokens):,} tokens)"
        )

        return content_id

    def get(self, author_id: str, title_id: str) -> str:
        """
        Fetch the stored text of a work.

        Args:
            author_id: Author identifier.
            title_id: Work identifier.

        Returns:
            The exact text passed to put().

        Raises:
            NotFoundError: If the work is not stored.
        """
        row = self._fetch_one(
            "SELECT content FROM contents WHERE author_id = ? AND title_id = ?",
            (author_id, title_id)
        )

        if row is None:
            raise NotFoundError(
                f"No content for {author_id}/{title_id}",
                author_id=author_id,
                title_id=title_id
            )

        return row["content"]

    def exists(self, author_id: str, title_id: str) -> bool:
        """Check if a work is already stored."""
        row = self._fetch_one(
            "SELECT 1 FROM contents WHERE author_id = ? AND title_id = ? LIMIT 1",
            (author_id, title_id)
        )
        return row is not None

    def delete(self, author_id: str, title_id: str) -> bool:
        """
        Delete a work and its postings.

        Returns:
            True if a row was deleted.
        """
        try:
            with get_cursor() as cur:
                cur.execute(
                    "DELETE FROM contents WHERE author_id = ? AND title_id = ?",
                    (author_id, title_id)
                )
                deleted = cur.rowcount > 0
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to delete {author_id}/{title_id}: {e}")

        if deleted:
            logger.debug(f"Deleted {author_id}/{title_id}")

        return deleted

    def list_authors(self) -> List[Author]:
        """
        Get all stored authors.

        Returns:
            Authors ordered by author_id.
        """
        rows = self._fetch_all(
            "SELECT author_id, author FROM authors ORDER BY author_id"
        )
        return [Author(author_id=row["author_id"], author=row["author"]) for row in rows]

    def list_titles(self, author_id: str) -> List[Title]:
        """
        Get the stored works of an author.

        Args:
            author_id: Author identifier.

        Returns:
            Works ordered by title_id.
        """
        rows = self._fetch_all(
            "SELECT author_id, title_id, title FROM contents "
            "WHERE author_id = ? ORDER BY title_id",
            (author_id,)
        )
        return [
            Title(author_id=row["author_id"], title_id=row["title_id"], title=row["title"])
            for row in rows
        ]

    def count(self) -> int:
        """Get total number of stored works."""
        row = self._fetch_one("SELECT COUNT(*) as count FROM contents")
        return row["count"]

    @staticmethod
    def _fetch_one(sql: str, params: tuple = ()):
        try:
            with get_connection() as conn:
                return conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed: {e}")

    @staticmethod
    def _fetch_all(sql: str, params: tuple = ()) -> list:
        try:
            with get_connection() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed: {e}")
