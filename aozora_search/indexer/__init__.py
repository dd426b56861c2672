"""
Indexer module for orchestrating the ingestion pipeline.

Coordinates entry discovery, archive extraction, and database storage
to build the full-text search index.
"""

from .index_builder import IndexBuilder, IndexingStats

__all__ = [
    "IndexBuilder",
    "IndexingStats"
]
