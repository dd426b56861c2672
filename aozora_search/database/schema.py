"""
Database schema definitions for Aozora Search.

Defines the authors and contents tables, the FTS5 table holding each
work's segmented words, and the trigger keeping postings in sync with
deleted contents.
"""

import sqlite3

from ..core import get_config, get_logger, DatabaseError
from .connection import get_cursor, get_connection

logger = get_logger(__name__)


AUTHORS_TABLE = """
CREATE TABLE IF NOT EXISTS authors (
    author_id TEXT NOT NULL PRIMARY KEY,
    author TEXT
)
"""

CONTENTS_TABLE = """
CREATE TABLE IF NOT EXISTS contents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    author_id TEXT NOT NULL,
    title_id TEXT NOT NULL,
    title TEXT,
    content TEXT,
    site_url TEXT,
    zip_url TEXT,
    indexed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(author_id, title_id)
)
"""

def _get_fts_table_sql() -> str:
    """Generate FTS5 table creation SQL with configured tokenizer."""
    config = get_config()
    tokenizer = config.search.fts_tokenizer

    return f"""
    CREATE VIRTUAL TABLE IF NOT EXISTS contents_fts USING fts5(
        words,
        tokenize='{tokenizer}'
    )
    """


FTS_TRIGGERS = [
    """
    CREATE TRIGGER IF NOT EXISTS contents_ad AFTER DELETE ON contents BEGIN
        DELETE FROM contents_fts WHERE rowid = old.id;
    END
    """
]


def init_schema() -> None:
    """
    Initialize database schema if not exists.

    Creates authors and contents tables, the FTS5 virtual table
    and its trigger.
    """
    logger.info("Initializing database schema")

    with get_cursor() as cur:
        cur.execute(AUTHORS_TABLE)
        cur.execute(CONTENTS_TABLE)

        try:
            cur.execute(_get_fts_table_sql())
        except sqlite3.OperationalError as e:
            if "already exists" not in str(e):
                raise DatabaseError(f"Failed to create FTS table: {e}")

        for trigger_sql in FTS_TRIGGERS:
            try:
                cur.execute(trigger_sql)
            except sqlite3.OperationalError as e:
                if "already exists" not in str(e):
                    raise DatabaseError(f"Failed to create trigger: {e}")

    logger.info("Schema initialization complete")


def reset_schema() -> None:
    """
    Drop and recreate all tables.

    Warning: This deletes all indexed data.
    """
    logger.warning("Resetting database schema - all data will be deleted")

    with get_cursor() as cur:
        cur.execute("DROP TRIGGER IF EXISTS contents_ad")
        cur.execute("DROP TABLE IF EXISTS contents_fts")
        cur.execute("DROP TABLE IF EXISTS contents")
        cur.execute("DROP TABLE IF EXISTS authors")

    init_schema()

    logger.info("Schema reset complete")


def get_statistics() -> dict:
    """
    Count stored authors and works for the collector summary.

    Returns:
        Dictionary with total_authors and total_works.
    """
    with get_connection() as conn:
        authors = conn.execute("SELECT COUNT(*) AS n FROM authors").fetchone()["n"]
        works = conn.execute("SELECT COUNT(*) AS n FROM contents").fetchone()["n"]

    return {"total_authors": authors, "total_works": works}
