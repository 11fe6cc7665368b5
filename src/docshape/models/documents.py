"""Immutable values produced by extraction and normalization."""

from dataclasses import dataclass
from datetime import datetime

from bs4 import BeautifulSoup, Tag


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of a successful extraction.

    Attributes:
        document_root: The document content_node belongs to. For the density
            layer this is the cleaned clone, not the parsed original.
        content_node: The meaningful content container, a reference into
            document_root.
        layer: Name of the extraction layer that produced content_node
    """

    document_root: BeautifulSoup
    content_node: Tag
    layer: str


@dataclass(frozen=True)
class Frontmatter:
    """
    Provenance header of a normalized document.

    All fields are set at construction; there is no partially-populated state.
    """

    title: str
    source_url: str
    canonical_url: str
    crawl_depth: int
    section: str
    doc_id: str
    content_hash: str
    fetched_at: datetime
    crawler_version: str

    def to_dict(self) -> dict:
        """Convert to an ordered dictionary for serialization."""
        return {
            "title": self.title,
            "source_url": self.source_url,
            "canonical_url": self.canonical_url,
            "crawl_depth": self.crawl_depth,
            "section": self.section,
            "doc_id": self.doc_id,
            "content_hash": self.content_hash,
            "fetched_at": self.fetched_at.isoformat(),
            "crawler_version": self.crawler_version,
        }


@dataclass(frozen=True)
class NormalizedMarkdownDoc:
    """A Markdown body that passed every structural invariant, plus its frontmatter."""

    frontmatter: Frontmatter
    content: bytes
