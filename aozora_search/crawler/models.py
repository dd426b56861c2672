"""
Data models for catalog crawling.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Entry:
    """
    A work discovered on a catalog listing page.

    Attributes:
        author_id: Catalog identifier of the author, stable per author.
        author: Author display name, empty if the detail page lacked it.
        title_id: Catalog identifier of the work, unique within an author.
        title: Work title, verbatim from the listing anchor text.
        site_url: Listing page the entry was discovered from.
        zip_url: Absolute URL of the archive holding the work's text.
    """
    author_id: str
    author: str
    title_id: str
    title: str
    site_url: str
    zip_url: str

    @property
    def key(self) -> Tuple[str, str]:
        """Identity of the work: (author_id, title_id)."""
        return self.author_id, self.title_id
