"""
Entry discovery from catalog listing pages.

Scans a listing page for links to work cards, then visits each card to
scrape the author name and the archive link. Works without a downloadable
archive are dropped; per-card failures never abort the listing.
"""

import re
from typing import Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..core import get_config, get_logger, FetchError, ParseError, MalformedURLError
from .http_client import HttpClient
from .models import Entry
from .url_resolver import resolve

logger = get_logger(__name__)


CARD_URL_PATTERN = re.compile(r".*/cards/([0-9]+)/card([0-9]+)\.html$")

LISTING_ANCHOR_SELECTOR = "ol li a"
AUTHOR_CELL_SELECTOR = 'table[summary="作家データ"] tr:nth-child(2) td:nth-child(2)'
DOWNLOAD_ANCHOR_SELECTOR = "table.download a"


def parse_html(body: bytes, url: str = None, encoding: str = None) -> BeautifulSoup:
    """
    Parse a fetched page.

    Args:
        body: Raw page bytes.
        url: Page URL, for error context.
        encoding: Charset from the response headers. When omitted, the
                  document's own meta declaration is used.

    Returns:
        Parsed document.

    Raises:
        ParseError: If the parser rejects the markup or no element is found.
    """
    try:
        soup = BeautifulSoup(body, "html.parser", from_encoding=encoding)
    except ParserRejectedMarkup as e:
        raise ParseError(f"Cannot parse markup: {e}", url=url)

    if soup.find() is None:
        raise ParseError("Document contains no markup elements", url=url)

    return soup


class EntryDiscoverer:
    """
    Produces Entry records from a catalog listing page.

    The detail-page URL is rebuilt from the identifiers through a template
    instead of following the anchor's href, which normalizes
    protocol-relative and query-decorated links.
    """

    def __init__(self, http_client: HttpClient = None, page_url_template: str = None):
        """
        Initialize the discoverer.

        Args:
            http_client: Client used for every fetch.
            page_url_template: Detail page template with {author_id} and
                               {title_id} placeholders. Defaults to config value.
        """
        config = get_config()

        self.http_client = http_client or HttpClient()
        self.page_url_template = page_url_template or config.crawler.page_url_template

    def page_url(self, author_id: str, title_id: str) -> str:
        """Build the detail page URL of a work."""
        return self.page_url_template.format(author_id=author_id, title_id=title_id)

    def discover(self, listing_url: str) -> List[Entry]:
        """
        Collect every downloadable work linked from a listing page.

        Args:
            listing_url: URL of the listing page.

        Returns:
            Entries in the order their anchors appear on the page.

        Raises:
            FetchError: If the listing page cannot be fetched.
            ParseError: If the listing page cannot be parsed.
        """
        entries = list(self.iter_entries(listing_url))
        logger.info(f"Found {len(entries)} entries on {listing_url}")
        return entries

    def iter_entries(self, listing_url: str) -> Iterator[Entry]:
        """
        Lazily yield entries of a listing page.

        The listing page itself is fetched before the first entry is
        yielded; each detail page is fetched on demand.
        """
        result = self.http_client.get(listing_url)
        soup = parse_html(result.body, url=listing_url, encoding=result.charset)

        for anchor in soup.select(LISTING_ANCHOR_SELECTOR):
            match = CARD_URL_PATTERN.match(anchor.get("href", ""))
            if not match:
                continue

            author_id, title_id = match.group(1), match.group(2)
            title = anchor.get_text()
            page_url = self.page_url(author_id, title_id)

            author, zip_url = self.find_author_and_zip(page_url)
            if not zip_url:
                logger.debug(f"No archive for {author_id}/{title_id}, skipping")
                continue

            yield Entry(
                author_id=author_id,
                author=author,
                title_id=title_id,
                title=title,
                site_url=listing_url,
                zip_url=zip_url
            )

    def find_author_and_zip(self, page_url: str) -> Tuple[str, Optional[str]]:
        """
        Scrape a work's detail page.

        Args:
            page_url: Detail page URL.

        Returns:
            Tuple of (author name, absolute archive URL). The URL is None
            when the page has no archive link or could not be processed.
        """
        try:
            result = self.http_client.get(page_url)
            soup = parse_html(result.body, url=page_url, encoding=result.charset)
        except (FetchError, ParseError) as e:
            logger.warning(f"Skipping detail page {page_url}: {e.message}")
            return "", None

        cell = soup.select_one(AUTHOR_CELL_SELECTOR)
        author = cell.get_text().strip() if cell is not None else ""

        # last .zip link wins
        zip_href = None
        for anchor in soup.select(DOWNLOAD_ANCHOR_SELECTOR):
            href = anchor.get("href", "")
            if href.endswith(".zip"):
                zip_href = href

        if zip_href is None:
            return author, None

        try:
            return author, resolve(page_url, zip_href)
        except MalformedURLError as e:
            logger.warning(f"Cannot resolve archive link on {page_url}: {e.message}")
            return author, None
