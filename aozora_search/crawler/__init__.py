"""
Crawler module for the Aozora Bunko catalog.

Provides HTTP fetching, archive URL resolution and discovery of work
entries from listing and detail pages.
"""

from .http_client import HttpClient, FetchResult
from .url_resolver import resolve
from .models import Entry
from .entry_discoverer import EntryDiscoverer

__all__ = [
    "HttpClient",
    "FetchResult",
    "resolve",
    "Entry",
    "EntryDiscoverer"
]
