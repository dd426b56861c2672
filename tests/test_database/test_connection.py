"""
Tests for database connection management.

Tests connection creation, context managers, and SQLite configuration.
"""

import sqlite3
from pathlib import Path

import pytest

from aozora_search.core.exceptions import DatabaseError
from aozora_search.database import connection
from aozora_search.database.connection import (
    DatabaseManager,
    get_connection,
    get_cursor,
    get_db_manager,
    use_database,
)


class TestDatabaseManager:
    """Tests for DatabaseManager class."""

    def test_manager_creation(self, temp_database: Path):
        """Test creating a database manager."""
        manager = DatabaseManager(temp_database)

        assert manager.db_path == temp_database

    def test_manager_accepts_string_path(self, temp_database: Path):
        """Test that a plain string path is converted."""
        manager = DatabaseManager(str(temp_database))

        assert manager.db_path == temp_database

    def test_manager_creates_parent_directory(self, temp_dir: Path):
        """Test that manager creates parent directories."""
        db_path = temp_dir / "subdir" / "nested" / "aozora.sqlite3"

        _manager = DatabaseManager(db_path)  # noqa: F841

        assert db_path.parent.exists()

    def test_connection_context_manager(self, temp_database: Path):
        """Test connection context manager."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as conn:
            assert isinstance(conn, sqlite3.Connection)

            result = conn.execute("SELECT 1").fetchone()
            assert result[0] == 1

    def test_cursor_context_manager(self, temp_database: Path):
        """Test cursor context manager."""
        manager = DatabaseManager(temp_database)

        with manager.cursor() as cursor:
            cursor.execute("CREATE TABLE test (id INTEGER PRIMARY KEY)")
            cursor.execute("INSERT INTO test (id) VALUES (1)")

        # Verify data was committed
        with manager.connection() as conn:
            result = conn.execute("SELECT id FROM test").fetchone()
            assert result[0] == 1

    def test_cursor_rollback_on_error(self, temp_database: Path):
        """Test that errors cause rollback."""
        manager = DatabaseManager(temp_database)

        with manager.cursor() as cursor:
            cursor.execute("CREATE TABLE test (id INTEGER PRIMARY KEY)")

        with pytest.raises(sqlite3.IntegrityError):
            with manager.cursor() as cursor:
                cursor.execute("INSERT INTO test (id) VALUES (1)")
                cursor.execute("INSERT INTO test (id) VALUES (1)")  # Duplicate

        # Table should exist but be empty (rollback)
        with manager.connection() as conn:
            result = conn.execute("SELECT COUNT(*) FROM test").fetchone()
            assert result[0] == 0

    def test_cursor_without_commit(self, temp_database: Path):
        """Test that commit=False leaves changes uncommitted."""
        manager = DatabaseManager(temp_database)

        with manager.cursor() as cursor:
            cursor.execute("CREATE TABLE test (id INTEGER PRIMARY KEY)")

        with manager.cursor(commit=False) as cursor:
            cursor.execute("INSERT INTO test (id) VALUES (1)")

        with manager.connection() as conn:
            result = conn.execute("SELECT COUNT(*) FROM test").fetchone()
            assert result[0] == 0

    def test_row_factory_enabled(self, temp_database: Path):
        """Test that row factory is enabled for dict-like access."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as conn:
            conn.execute("CREATE TABLE authors (author_id TEXT, author TEXT)")
            conn.execute("INSERT INTO authors VALUES ('000879', '芥川 竜之介')")
            conn.commit()

            row = conn.execute("SELECT * FROM authors").fetchone()

            assert row["author_id"] == "000879"
            assert row["author"] == "芥川 竜之介"

    def test_existing_only_rejects_missing_file(self, temp_dir: Path):
        """Test that create=False neither creates the file nor its directory."""
        db_path = temp_dir / "missing" / "aozora.sqlite3"

        with pytest.raises(DatabaseError) as exc_info:
            DatabaseManager(db_path, create=False)

        assert exc_info.value.details["path"] == str(db_path)
        assert not db_path.parent.exists()

    def test_existing_only_opens_existing_store(self, temp_database: Path):
        """Test that create=False reads and writes an existing file."""
        with DatabaseManager(temp_database).cursor() as cursor:
            cursor.execute("CREATE TABLE authors (author_id TEXT, author TEXT)")
            cursor.execute("INSERT INTO authors VALUES ('000879', '芥川 竜之介')")

        manager = DatabaseManager(temp_database, create=False)

        with manager.connection() as conn:
            row = conn.execute("SELECT author FROM authors").fetchone()

        assert row["author"] == "芥川 竜之介"

    def test_existing_only_does_not_recreate_deleted_file(self, temp_database: Path):
        """Test that a store removed after the check is not silently recreated."""
        temp_database.touch()
        manager = DatabaseManager(temp_database, create=False)
        temp_database.unlink()

        with pytest.raises(DatabaseError):
            with manager.connection():
                pass

        assert not temp_database.exists()

    def test_wal_mode_enabled(self, temp_database: Path):
        """Test that WAL journal mode is enabled."""
        manager = DatabaseManager(temp_database)

        with manager.connection() as conn:
            result = conn.execute("PRAGMA journal_mode").fetchone()
            assert result[0].lower() == "wal"


class TestSingleton:
    """Tests for the module-level manager."""

    def test_default_manager_uses_config_path(self, configured_db):
        """Test that the singleton follows paths.database_path."""
        from aozora_search.core.config_loader import get_config

        manager = get_db_manager()

        assert manager.db_path == get_config().paths.database_path
        assert get_db_manager() is manager

    def test_use_database_switches_singleton(self, temp_dir: Path, reset_db_singleton):
        """Test that use_database redirects get_cursor and get_connection."""
        db_path = temp_dir / "other.sqlite3"

        manager = use_database(db_path)

        assert connection._db_manager is manager
        assert manager.db_path == db_path

        with get_cursor() as cur:
            cur.execute("CREATE TABLE test (id INTEGER)")
            cur.execute("INSERT INTO test VALUES (7)")

        with get_connection() as conn:
            assert conn.execute("SELECT id FROM test").fetchone()["id"] == 7

    def test_use_database_existing_only_rejects_missing(self, temp_dir: Path, reset_db_singleton):
        """Test that a read-only switch to a missing file keeps the old manager."""
        previous = use_database(temp_dir / "current.sqlite3")

        with pytest.raises(DatabaseError):
            use_database(temp_dir / "typo.sqlite3", create=False)

        assert connection._db_manager is previous
        assert not (temp_dir / "typo.sqlite3").exists()
