"""
Extraction module for Aozora Search.

Provides archive download and plain-text extraction with legacy
encoding conversion.
"""

from .archive_extractor import ArchiveTextExtractor, member_extension

__all__ = [
    "ArchiveTextExtractor",
    "member_extension"
]
