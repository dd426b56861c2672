"""
Configuration loader for Aozora Search.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError
from .logger import DEFAULT_FORMAT, LOG_FILENAME


DEFAULT_LISTING_URL = "https://www.aozora.gr.jp/index_pages/person879.html"
DEFAULT_PAGE_URL_TEMPLATE = "https://www.aozora.gr.jp/cards/{author_id}/card{title_id}.html"


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Path


@dataclass
class CrawlerConfig:
    """Configuration for catalog crawling and HTTP transport."""
    listing_urls: List[str]
    page_url_template: str
    user_agent: str
    timeout_s: float
    max_retries: int
    backoff_base_s: float
    max_retry_wait_s: float


@dataclass
class ExtractionConfig:
    """Configuration for archive text extraction."""
    source_encoding: str
    text_extension: str


@dataclass
class TokenizerConfig:
    """Configuration for the MeCab morphological analyzer."""
    mecab_args: str


@dataclass
class IndexingConfig:
    """Configuration for indexing behavior."""
    skip_existing: bool
    log_progress_every: int


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    default_limit: int
    fts_tokenizer: str


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int
    log_filename: str


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    crawler: CrawlerConfig
    extraction: ExtractionConfig
    tokenizer: TokenizerConfig
    indexing: IndexingConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.resolve().parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            database_path=cls._resolve_path(paths_data.get("database_path", "output/aozora.sqlite3"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root)
        )

        crawler_data = data.get("crawler", {})
        listing_urls = crawler_data.get("listing_urls", [DEFAULT_LISTING_URL])
        if isinstance(listing_urls, str):
            listing_urls = [listing_urls]

        page_url_template = crawler_data.get("page_url_template", DEFAULT_PAGE_URL_TEMPLATE)
        if "{author_id}" not in page_url_template or "{title_id}" not in page_url_template:
            raise ConfigurationError(
                "crawler.page_url_template must contain {author_id} and {title_id}",
                {"page_url_template": page_url_template}
            )

        crawler = CrawlerConfig(
            listing_urls=list(listing_urls),
            page_url_template=page_url_template,
            user_agent=crawler_data.get("user_agent", "aozora-search/1.0"),
            timeout_s=crawler_data.get("timeout_s", 30.0),
            max_retries=crawler_data.get("max_retries", 2),
            backoff_base_s=crawler_data.get("backoff_base_s", 1.0),
            max_retry_wait_s=crawler_data.get("max_retry_wait_s", 60.0)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            source_encoding=ext_data.get("source_encoding", "cp932"),
            text_extension=ext_data.get("text_extension", ".txt")
        )

        tok_data = data.get("tokenizer", {})
        tokenizer = TokenizerConfig(
            mecab_args=tok_data.get("mecab_args", "-Owakati")
        )

        idx_data = data.get("indexing", {})
        indexing = IndexingConfig(
            skip_existing=idx_data.get("skip_existing", False),
            log_progress_every=idx_data.get("log_progress_every", 10)
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            default_limit=search_data.get("default_limit", 0),
            fts_tokenizer=search_data.get("fts_tokenizer", "unicode61")
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", DEFAULT_FORMAT),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5),
            log_filename=log_data.get("log_filename", LOG_FILENAME)
        )

        return cls(
            paths=paths,
            crawler=crawler,
            extraction=extraction,
            tokenizer=tokenizer,
            indexing=indexing,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Database path: {config.paths.database_path}")
        print(f"Listing URLs: {config.crawler.listing_urls}")
        print(f"Source encoding: {config.extraction.source_encoding}")
        print(f"FTS tokenizer: {config.search.fts_tokenizer}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
