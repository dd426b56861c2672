"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config
from .logger import get_logger
from .exceptions import (
    AozoraSearchError,
    ConfigurationError,
    FetchError,
    ParseError,
    MalformedURLError,
    ExtractionError,
    ArchiveFormatError,
    EncodingError,
    ContentNotFoundError,
    TokenizerError,
    DatabaseError,
    StoreWriteError,
    NotFoundError,
    SearchError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "get_logger",
    "AozoraSearchError",
    "ConfigurationError",
    "FetchError",
    "ParseError",
    "MalformedURLError",
    "ExtractionError",
    "ArchiveFormatError",
    "EncodingError",
    "ContentNotFoundError",
    "TokenizerError",
    "DatabaseError",
    "StoreWriteError",
    "NotFoundError",
    "SearchError"
]
