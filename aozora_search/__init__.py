"""
Aozora Search Package.

Harvests public-domain Japanese literary texts from the Aozora Bunko catalog,
decodes them, segments them with MeCab and indexes them into SQLite with
FTS5 full-text search, queryable from the command line.
"""

__version__ = "1.0.0"
