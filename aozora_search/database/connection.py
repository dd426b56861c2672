"""
SQLite connection management for Aozora Search.

The collector owns the database file and may create it; the search tool
only reads an existing store and must never leave an empty file behind
for a mistyped path.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from ..core import get_config, get_logger, DatabaseError

logger = get_logger(__name__)


PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA temp_store=MEMORY",
)


class DatabaseManager:
    """
    Opens connections to one SQLite store.

    Args:
        db_path: Path to the database file. Defaults to paths.database_path.
        create: If False, the file must already exist and connections
                open it with mode=rw, so a missing store raises
                DatabaseError instead of being created.
    """

    def __init__(self, db_path: Union[str, Path] = None, create: bool = True):
        if db_path is None:
            db_path = get_config().paths.database_path
        self.db_path = Path(db_path)
        self.create = create

        if create:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        elif not self.db_path.is_file():
            raise DatabaseError(
                f"Database not found: {self.db_path}",
                {"path": str(self.db_path)}
            )

    def _create_connection(self) -> sqlite3.Connection:
        try:
            if self.create:
                conn = sqlite3.connect(self.db_path, timeout=30.0)
            else:
                uri = self.db_path.resolve().as_uri() + "?mode=rw"
                conn = sqlite3.connect(uri, timeout=30.0, uri=True)

            conn.row_factory = sqlite3.Row
            for pragma in PRAGMAS:
                conn.execute(pragma)

            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to open database {self.db_path}: {e}",
                {"path": str(self.db_path), "create": self.create}
            )

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection with Row factory, closed on exit."""
        conn = self._create_connection()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self, commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
        """
        Yield a cursor running in its own transaction.

        Commits on success when commit is True; any exception rolls the
        whole transaction back before it propagates.
        """
        conn = self._create_connection()
        cursor = conn.cursor()

        try:
            yield cursor
            if commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get the singleton DatabaseManager, creating one for the configured path."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def use_database(db_path: Union[str, Path], create: bool = True) -> DatabaseManager:
    """
    Point the singleton manager at another database file.

    Args:
        db_path: Path to the SQLite database file.
        create: Pass False for read-only callers; a missing file then
                raises DatabaseError and nothing is created.

    Returns:
        The new DatabaseManager.
    """
    global _db_manager
    _db_manager = DatabaseManager(db_path, create=create)
    logger.debug(f"Using database: {_db_manager.db_path} (create={create})")
    return _db_manager


@contextmanager
def get_connection() -> Generator[sqlite3.Connection, None, None]:
    with get_db_manager().connection() as conn:
        yield conn


@contextmanager
def get_cursor(commit: bool = True) -> Generator[sqlite3.Cursor, None, None]:
    with get_db_manager().cursor(commit=commit) as cur:
        yield cur
