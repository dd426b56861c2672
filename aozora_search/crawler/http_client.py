"""
HTTP transport for catalog pages and archives.

Wraps a requests Session with a configurable timeout, User-Agent and
retry with exponential backoff on transient failures. Every failure that
survives the retries surfaces as a FetchError.
"""

import re
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests
from requests import exceptions as req_exc

from ..core import get_config, get_logger, FetchError

logger = get_logger(__name__)


TRANSIENT_HTTP_STATUSES = {429, 500, 502, 503, 504}
CHARSET_PATTERN = re.compile(r"charset=[\"']?([\w.:-]+)", re.IGNORECASE)


def _retry_after_seconds(headers: Dict[str, str]) -> Optional[float]:
    retry_after = headers.get("Retry-After")
    if not retry_after:
        return None
    try:
        return float(retry_after)
    except ValueError:
        return None


@dataclass
class FetchResult:
    """Response of a successful fetch."""
    url: str
    final_url: str
    status_code: int
    headers: Dict[str, str]
    body: bytes
    fetched_at: float

    @property
    def charset(self) -> Optional[str]:
        """Charset declared in the Content-Type header, if any."""
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                match = CHARSET_PATTERN.search(value)
                return match.group(1) if match else None
        return None


class HttpClient:
    """
    Blocking HTTP GET client used by the discoverer and the extractor.

    Retries transient statuses (429, 5xx) and transport exceptions,
    raises FetchError on any final failure or non-2xx status.
    """

    def __init__(
        self,
        session: requests.Session = None,
        timeout_s: float = None,
        max_retries: int = None,
        backoff_base_s: float = None,
        user_agent: str = None,
        max_retry_wait_s: float = None
    ):
        """
        Initialize the client.

        Args:
            session: Session to reuse. A new one is created if omitted.
            timeout_s: Per-request timeout in seconds.
            max_retries: Retries after the first attempt.
            backoff_base_s: Base delay for exponential backoff.
            user_agent: User-Agent header sent with each request.
            max_retry_wait_s: Upper bound on a server-requested Retry-After.
        """
        config = get_config()

        self.session = session or requests.Session()
        self.timeout_s = timeout_s if timeout_s is not None else config.crawler.timeout_s
        self.max_retries = max_retries if max_retries is not None else config.crawler.max_retries
        self.backoff_base_s = (
            backoff_base_s if backoff_base_s is not None else config.crawler.backoff_base_s
        )
        self.user_agent = user_agent or config.crawler.user_agent
        self.max_retry_wait_s = (
            max_retry_wait_s if max_retry_wait_s is not None else config.crawler.max_retry_wait_s
        )

    def _retry_wait(self, resp: requests.Response, attempt: int) -> float:
        retry_after = _retry_after_seconds(dict(resp.headers))
        if retry_after is None:
            return self.backoff_base_s * (2 ** attempt)
        if retry_after > self.max_retry_wait_s:
            logger.warning(
                f"Retry-After {retry_after:.0f}s from {resp.url} capped at {self.max_retry_wait_s:.0f}s"
            )
        return max(0.0, min(retry_after, self.max_retry_wait_s))

    def get(self, url: str) -> FetchResult:
        """
        Fetch a URL.

        Args:
            url: Absolute URL to fetch.

        Returns:
            FetchResult with the response body.

        Raises:
            FetchError: On transport failure or non-success status.
        """
        headers = {"User-Agent": self.user_agent}
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = self.session.get(url, timeout=self.timeout_s, headers=headers)
            except req_exc.RequestException as e:
                last_error = e
                if attempt >= self.max_retries:
                    break
                logger.debug(f"Transport error on {url} (attempt {attempt + 1}): {e}")
                time.sleep(self.backoff_base_s * (2 ** attempt))
                continue

            if resp.status_code in TRANSIENT_HTTP_STATUSES and attempt < self.max_retries:
                wait_s = self._retry_wait(resp, attempt)
                logger.debug(f"HTTP {resp.status_code} on {url}, retrying in {wait_s:.1f}s")
                time.sleep(wait_s)
                continue

            if not 200 <= resp.status_code < 300:
                raise FetchError(
                    f"HTTP {resp.status_code} fetching {url}",
                    url=url,
                    status_code=resp.status_code
                )

            return FetchResult(
                url=url,
                final_url=str(resp.url),
                status_code=int(resp.status_code),
                headers={k: str(v) for k, v in resp.headers.items()},
                body=resp.content,
                fetched_at=time.time()
            )

        raise FetchError(
            f"Failed to fetch {url}: {last_error}",
            url=url,
            details={"attempts": self.max_retries + 1}
        )

    def get_bytes(self, url: str) -> bytes:
        """Fetch a URL and return only its body."""
        return self.get(url).body
