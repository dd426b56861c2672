"""
Main ingestion pipeline for Aozora Search.

Orchestrates the complete workflow: discovering entries on listing pages,
extracting each work's text from its archive, and storing it with its
postings. Works are processed one at a time; a failing work is logged and
skipped while the rest of the catalog keeps going.
"""

from dataclasses import dataclass, field
from typing import Callable, List

from ..core import (
    get_config,
    get_logger,
    ExtractionError,
    FetchError,
    StoreWriteError,
    TokenizerError
)
from ..crawler import Entry, EntryDiscoverer
from ..database import init_schema, reset_schema, ContentRepository
from ..extraction import ArchiveTextExtractor

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from an ingestion run."""
    listings_scanned: int = 0
    entries_found: int = 0
    entries_indexed: int = 0
    entries_skipped: int = 0
    entries_failed: int = 0
    errors: List[str] = field(default_factory=list)


class IndexBuilder:
    """
    Orchestrates the ingestion pipeline.

    Listing-page failures and database connection failures abort the run;
    failures of a single work (download, archive, encoding, storage) are
    recorded in the stats and the next work is processed.
    """

    def __init__(
        self,
        listing_urls: List[str] = None,
        reset: bool = False,
        progress_callback: Callable[[int, int, str], None] = None,
        discoverer: EntryDiscoverer = None,
        extractor: ArchiveTextExtractor = None,
        repository: ContentRepository = None
    ):
        """
        Initialize the index builder.

        Args:
            listing_urls: Listing pages to crawl. Defaults to config value.
            reset: If True, drop and recreate the database schema.
            progress_callback: Optional callback(current, total, title)
                              called during indexing for progress updates.
            discoverer: Entry discoverer, created from config if omitted.
            extractor: Archive extractor, created from config if omitted.
            repository: Content repository, created if omitted.
        """
        self.config = get_config()
        self.listing_urls = listing_urls or self.config.crawler.listing_urls
        self.reset = reset
        self.progress_callback = progress_callback

        self.discoverer = discoverer or EntryDiscoverer()
        self.extractor = extractor or ArchiveTextExtractor()
        self.repository = repository or ContentRepository()

        self.skip_existing = self.config.indexing.skip_existing
        self.log_every = self.config.indexing.log_progress_every

    def build(self) -> IndexingStats:
        """
        Run the complete ingestion pipeline.

        Returns:
            IndexingStats with counts and any errors encountered.

        Raises:
            FetchError: If a listing page cannot be fetched.
            ParseError: If a listing page cannot be parsed.
            DatabaseError: If the database cannot be opened.
        """
        stats = IndexingStats()

        logger.info("Starting ingestion pipeline")

        if self.reset:
            reset_schema()
        else:
            init_schema()

        for listing_url in self.listing_urls:
            entries = self.discoverer.discover(listing_url)
            stats.listings_scanned += 1
            stats.entries_found += len(entries)

            self._process_entries(entries, stats)

        logger.info(
            f"Ingestion complete: {stats.entries_indexed} works indexed, "
            f"{stats.entries_skipped} skipped, {stats.entries_failed} failures"
        )

        return stats

    def _process_entries(self, entries: List[Entry], stats: IndexingStats) -> None:
        """Extract and store each entry of a listing page in order."""
        total = len(entries)

        for i, entry in enumerate(entries):
            if self.skip_existing and self.repository.exists(*entry.key):
                stats.entries_skipped += 1
                continue

            if self.progress_callback:
                self.progress_callback(i + 1, total, entry.title)

            try:
                self.index_entry(entry)
                stats.entries_indexed += 1

            except (FetchError, ExtractionError, TokenizerError, StoreWriteError) as e:
                stats.entries_failed += 1
                error_msg = f"{entry.author_id}/{entry.title_id} {entry.title}: {e.message}"
                stats.errors.append(error_msg)
                logger.warning(f"Failed to index: {error_msg}")

            if self.log_every and (i + 1) % self.log_every == 0:
                logger.info(
                    f"Progress: {i + 1}/{total} works "
                    f"({stats.entries_indexed} indexed, {stats.entries_failed} failed)"
                )

    def index_entry(self, entry: Entry) -> int:
        """
        Extract and store a single work.

        Args:
            entry: Discovered work.

        Returns:
            Row ID of the stored content.
        """
        logger.info(f"Adding {entry.author_id}/{entry.title_id} {entry.title} ({entry.zip_url})")
        text = self.extractor.extract(entry.zip_url)
        return self.repository.put(entry, text)

