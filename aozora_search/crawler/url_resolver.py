"""
Archive URL resolution against a detail page.

Catalog pages link their archives relative to the page's directory
(./files/171_ruby_1273.zip), so references are joined to
dirname(base.path) rather than to the page path itself.
"""

import posixpath
import re
from urllib.parse import urlsplit, urlunsplit

from ..core import MalformedURLError


SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def has_scheme(ref: str) -> bool:
    """Check whether a reference carries an explicit scheme (http://, https://, ...)."""
    return bool(SCHEME_PATTERN.match(ref))


def resolve(base_page_url: str, candidate_ref: str) -> str:
    """
    Turn a possibly-relative reference into an absolute URL.

    Args:
        base_page_url: URL of the page the reference was found on.
        candidate_ref: href value, absolute or relative.

    Returns:
        Absolute URL. References with a scheme are returned unchanged.

    Raises:
        MalformedURLError: If base_page_url is not a parseable absolute URL.
    """
    if has_scheme(candidate_ref):
        return candidate_ref

    try:
        base = urlsplit(base_page_url)
        ref = urlsplit(candidate_ref)
    except ValueError as e:
        raise MalformedURLError(
            f"Cannot parse URL: {e}",
            url=base_page_url,
            details={"ref": candidate_ref}
        )

    if not base.scheme or not base.netloc:
        raise MalformedURLError(
            f"Base URL is not absolute: {base_page_url!r}",
            url=base_page_url,
            details={"ref": candidate_ref}
        )

    # protocol-relative: //host/path
    if ref.netloc:
        return urlunsplit((base.scheme, ref.netloc, ref.path, ref.query, ref.fragment))

    if ref.path.startswith("/"):
        path = ref.path
    else:
        path = posixpath.join(posixpath.dirname(base.path), ref.path)

    path = posixpath.normpath(path) if path else "/"
    path = "/" + path.lstrip("/")

    return urlunsplit((base.scheme, base.netloc, path, ref.query, ref.fragment))
