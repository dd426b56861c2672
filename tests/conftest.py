"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, a temporary config.json, catalog page and
archive builders, and singleton resets so tests are isolated and never
touch the network or a real database.
"""

import io
import json
import logging
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Generator, List, Tuple

import pytest

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


SITE = "https://aozora.test"
LISTING_URL = f"{SITE}/index_pages/person999999.html"
PAGE_URL_TEMPLATE = SITE + "/cards/{author_id}/card{title_id}.html"

LISTING_HTML = """<html><head><meta charset="utf-8"></head><body>
<table summary="作家データ">
    <tbody>
        <tr><td class="header">分類：</td><td>著者</td></tr>
        <tr><td class="header">作家名：</td><td><font size="+2">テスト 太郎</font></td></tr>
    </tbody>
</table>
<p><a href="/index_pages/index_top.html">トップ</a></p>
<ol>
    <li><a href="/cards/999999/card000001.html">テスト書籍001</a></li>
    <li><a href="/cards/999999/card000002.html">テスト書籍002</a></li>
    <li><a href="/cards/999999/card000003.html">テスト書籍003</a></li>
    <li><a href="/index_pages/list_inp999999_1.html">入力中の作品</a></li>
</ol>
</body></html>
"""

DETAIL_HTML_TEMPLATE = """<html><head><meta charset="utf-8"></head><body>
<table summary="作家データ">
<tbody>
    <tr><td class="header">分類：</td><td>著者</td></tr>
    <tr><td class="header">作家名：</td><td><font size="+2">テスト 太郎</font></td></tr>
    <tr><td class="header">作家名読み：</td><td>てすと たろう</td></tr>
    <tr><td class="header">ローマ字表記：</td><td>Test, Taro</td></tr>
</tbody>
</table>
<table border="1" summary="ダウンロードデータ" class="download">
    <tbody>
        {rows}
    </tbody>
</table>
</body></html>
"""


def detail_html(*hrefs: str) -> str:
    """Build a detail page whose download table links the given hrefs."""
    rows = "\n".join(
        f'<tr><td><a href="{href}">{href.rsplit("/", 1)[-1]}</a></td></tr>'
        for href in hrefs
    )
    return DETAIL_HTML_TEMPLATE.format(rows=rows)


def build_zip(members: List[Tuple[str, bytes]]) -> bytes:
    """Build an in-memory zip archive from (name, data) pairs, in order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in members:
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="aozora_search_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    output_dir = temp_dir / "output"
    output_dir.mkdir()

    logs_dir = output_dir / "logs"
    logs_dir.mkdir()

    config_data = {
        "paths": {
            "database_path": str(output_dir / "test.sqlite3"),
            "logs_directory": str(logs_dir)
        },
        "crawler": {
            "listing_urls": [LISTING_URL],
            "page_url_template": PAGE_URL_TEMPLATE,
            "user_agent": "aozora-search-test",
            "timeout_s": 5,
            "max_retries": 0,
            "backoff_base_s": 0,
            "max_retry_wait_s": 2
        },
        "extraction": {
            "source_encoding": "cp932",
            "text_extension": ".txt"
        },
        "tokenizer": {
            "mecab_args": "-Owakati"
        },
        "indexing": {
            "skip_existing": False,
            "log_progress_every": 2
        },
        "search": {
            "default_limit": 0,
            "fts_tokenizer": "unicode61"
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1,
            "log_filename": "test.log"
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f, ensure_ascii=False)

    yield config_path


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """
    Create path for a temporary database.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path where test database should be created.
    """
    return temp_dir / "test.sqlite3"


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from aozora_search.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Reset the logger initialization flag between tests.
    """
    from aozora_search.core import logger
    root = logging.getLogger()
    handlers = list(root.handlers)
    logger._logger_initialized = False
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    logger._logger_initialized = False


@pytest.fixture
def reset_db_singleton():
    """
    Reset the database manager singleton between tests.
    """
    from aozora_search.database import connection
    connection._db_manager = None
    yield
    connection._db_manager = None


@pytest.fixture
def configured_db(temp_config, reset_config_singleton, reset_db_singleton):
    """
    Set up a fully configured environment using temp config.

    Initializes config with temp paths and resets both config and db
    singletons, ready for schema operations and HTTP-mocked crawling.
    """
    from aozora_search.core.config_loader import get_config
    get_config(temp_config)
    yield
    # Cleanup happens via reset fixtures


@pytest.fixture(scope="session")
def tokenizer():
    """Shared MeCab tokenizer (loading the dictionary is slow)."""
    from aozora_search.tokenizer import Tokenizer
    return Tokenizer("-Owakati")


@pytest.fixture
def zip_builder() -> Callable[[List[Tuple[str, bytes]]], bytes]:
    """Expose build_zip to tests."""
    return build_zip


@pytest.fixture
def make_entry():
    """Factory for Entry records of the test author."""
    from aozora_search.crawler.models import Entry

    def _make(title_id: str = "000001", title: str = "テスト書籍001",
              author_id: str = "999999", author: str = "テスト 太郎") -> Entry:
        return Entry(
            author_id=author_id,
            author=author,
            title_id=title_id,
            title=title,
            site_url=LISTING_URL,
            zip_url=f"{SITE}/cards/{author_id}/files/{author_id}_{title_id}.zip"
        )

    return _make
