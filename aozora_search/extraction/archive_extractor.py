"""
Plain-text extraction from catalog archives.

Fetches a zip archive, takes the first member with the plain-text
extension and decodes it from Shift-JIS (cp932) into str.
"""

import io
import zipfile
import zlib

from ..core import (
    get_config,
    get_logger,
    ArchiveFormatError,
    EncodingError,
    ContentNotFoundError
)
from ..crawler import HttpClient

logger = get_logger(__name__)


def member_extension(name: str) -> str:
    """
    Extension of an archive member, taken from its last path component.

    Returns:
        The suffix starting at the last dot ("" if there is none).
    """
    basename = name.rsplit("/", 1)[-1]
    dot = basename.rfind(".")
    return basename[dot:] if dot >= 0 else ""


class ArchiveTextExtractor:
    """
    Extracts the text payload of a work from its zip archive.

    Only the first member whose extension matches exactly (case-sensitive)
    is read, even if the archive holds several text files.
    """

    def __init__(
        self,
        http_client: HttpClient = None,
        encoding: str = None,
        text_extension: str = None
    ):
        """
        Initialize the extractor.

        Args:
            http_client: Client used to download archives.
            encoding: Codec of the archived text. Defaults to config value.
            text_extension: Extension of the text member. Defaults to config value.
        """
        config = get_config()

        self.http_client = http_client or HttpClient()
        self.encoding = encoding or config.extraction.source_encoding
        self.text_extension = text_extension or config.extraction.text_extension

    def extract(self, zip_url: str) -> str:
        """
        Download an archive and return its decoded text.

        Args:
            zip_url: Absolute URL of the archive.

        Returns:
            Decoded text of the first plain-text member.

        Raises:
            FetchError: If the archive cannot be downloaded.
            ArchiveFormatError: If the payload is not a readable zip archive.
            EncodingError: If the text is not valid in the source encoding.
            ContentNotFoundError: If the archive holds no plain-text member.
        """
        data = self.http_client.get_bytes(zip_url)
        logger.debug(f"Downloaded {len(data):,} bytes from {zip_url}")
        return self.extract_bytes(data, source=zip_url)

    def extract_bytes(self, data: bytes, source: str = None) -> str:
        """
        Decode the text member of an in-memory archive.

        Args:
            data: Raw archive bytes.
            source: Label used in error messages, usually the archive URL.

        Returns:
            Decoded text.
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(f"Not a zip archive: {e}", source=source)

        with archive:
            for info in archive.infolist():
                if member_extension(info.filename) != self.text_extension:
                    continue

                try:
                    raw = archive.read(info)
                except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError) as e:
                    raise ArchiveFormatError(
                        f"Cannot read member {info.filename}: {e}",
                        source=source,
                        details={"member": info.filename}
                    )

                try:
                    text = raw.decode(self.encoding)
                except UnicodeDecodeError as e:
                    raise EncodingError(
                        f"Member {info.filename} is not valid {self.encoding}: {e.reason}",
                        source=source,
                        details={"member": info.filename, "position": e.start}
                    )

                logger.debug(f"Extracted {info.filename} ({len(text):,} chars)")
                return text

        raise ContentNotFoundError(
            f"No {self.text_extension} member in archive",
            source=source
        )
