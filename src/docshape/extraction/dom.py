"""HTML parsing and document validation."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from ..errors import ErrorCause, ExtractionError

logger = logging.getLogger(__name__)

PARSER = "html.parser"

_CHARSET_RE = re.compile(rb"""charset=["']?([^"'\s>;]+)""", re.IGNORECASE)


def detect_encoding(html: bytes) -> str:
    """Detect character encoding from a <meta charset> near the top of the document."""
    match = _CHARSET_RE.search(html[:2048])
    if match:
        return match.group(1).decode("ascii", errors="ignore").strip() or "utf-8"
    return "utf-8"


def decode_html(html: bytes) -> str:
    """Decode HTML bytes using the declared charset, falling back to UTF-8."""
    encoding = detect_encoding(html)
    try:
        return html.decode(encoding, errors="replace")
    except LookupError:
        return html.decode("utf-8", errors="replace")


def has_html_root(soup: BeautifulSoup) -> bool:
    """Check whether the tree contains an <html> element anywhere (depth-first)."""
    return isinstance(soup.find("html"), Tag)


def parse_html(html: bytes) -> BeautifulSoup:
    """
    Parse raw bytes into a DOM tree.

    Args:
        html: Raw HTML bytes

    Returns:
        Parsed document

    Raises:
        ExtractionError: NOT_HTML if parsing fails or the document has no <html> element.
            No partial tree is ever returned.
    """
    try:
        soup = BeautifulSoup(decode_html(html), PARSER)
    except Exception as e:
        raise ExtractionError(f"failed to parse HTML: {e}", ErrorCause.NOT_HTML) from e

    if not has_html_root(soup):
        raise ExtractionError("input is not a valid HTML document", ErrorCause.NOT_HTML)

    logger.debug("Parsed HTML document (%d bytes)", len(html))
    return soup
