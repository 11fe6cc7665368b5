"""Removal of site chrome (navigation, headers, banners) from a cloned document."""

import copy
import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements that are always chrome
CHROME_TAGS = ("nav", "header", "footer", "aside")

# Keywords that mark chrome when found in a class or id (case-insensitive substring)
CHROME_ATTRIBUTE_KEYWORDS = (
    "nav",
    "sidebar",
    "menu",
    "breadcrumb",
    "search",
    "footer",
    "header",
    "cookie",
    "consent",
    "version",
    "language",
    "theme",
    "edit",
    "github",
)


def clone_document(soup: BeautifulSoup) -> BeautifulSoup:
    """Deep-copy a parsed document so destructive edits leave the original intact."""
    return copy.copy(soup)


def _attribute_text(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    # class is multi-valued in bs4
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def has_chrome_attribute(tag: Tag) -> bool:
    """Check whether a tag's class or id contains a chrome keyword."""
    for name in ("class", "id"):
        value = _attribute_text(tag, name).lower()
        if value and any(keyword in value for keyword in CHROME_ATTRIBUTE_KEYWORDS):
            return True
    return False


def _detach(tags: list[Tag]) -> int:
    removed = 0
    for tag in tags:
        if tag.parent is not None:
            tag.extract()
            removed += 1
    return removed


def remove_chrome_elements(root: Tag) -> int:
    """Remove every <nav>, <header>, <footer> and <aside>. Returns the number removed."""
    # Collect before mutating so removal does not disturb the traversal
    return _detach(root.find_all(CHROME_TAGS))


def remove_chrome_attributed_elements(root: Tag) -> int:
    """Remove every element whose class or id contains a chrome keyword."""
    return _detach([tag for tag in root.find_all(True) if has_chrome_attribute(tag)])


def remove_chrome(soup: BeautifulSoup) -> BeautifulSoup:
    """
    Return a cleaned clone of the document.

    The original document is never modified. Two passes run on the clone:
    chrome tags first, then chrome-attributed elements.
    """
    cleaned = clone_document(soup)
    by_tag = remove_chrome_elements(cleaned)
    by_attr = remove_chrome_attributed_elements(cleaned)
    logger.debug("Removed %d chrome elements and %d chrome-attributed elements", by_tag, by_attr)
    return cleaned
