"""
Logging for the collector and search tools.

Progress and per-work failures go to stderr so run_search can keep stdout
for results; the same records are kept in a rotating log file under
paths.logs_directory. HTTP library chatter is held at WARNING, otherwise a
DEBUG crawl logs every pooled connection.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_FILENAME = "aozora_search.log"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIET_LOGGERS = ("urllib3", "charset_normalizer")

_logger_initialized = False


def _rotating_handler(
    logs_directory: Path,
    log_filename: str,
    max_file_size_mb: int,
    backup_count: int
) -> RotatingFileHandler:
    logs_directory = Path(logs_directory)
    logs_directory.mkdir(parents=True, exist_ok=True)

    # Japanese titles and author names appear in most records
    return RotatingFileHandler(
        logs_directory / log_filename,
        maxBytes=max_file_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    log_filename: str = LOG_FILENAME
) -> None:
    """
    Attach the stderr and log file handlers to the root logger, once.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string shared by both handlers.
        logs_directory: Directory for the log file. None keeps stderr only.
        max_file_size_mb: Size at which the log file is rotated.
        backup_count: Rotated files to keep.
        log_filename: Name of the log file inside logs_directory.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    handlers = [logging.StreamHandler(sys.stderr)]
    if logs_directory:
        handlers.append(
            _rotating_handler(logs_directory, log_filename, max_file_size_mb, backup_count)
        )

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, setting up logging from config.json on first use.

    Falls back to stderr-only defaults when the config cannot be loaded
    or the logs directory cannot be created.
    """
    if not _logger_initialized:
        from .config_loader import get_config
        from .exceptions import ConfigurationError
        try:
            config = get_config()
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count,
                log_filename=config.logging.log_filename
            )
        except (ConfigurationError, OSError):
            setup_logging()

    return logging.getLogger(name)
