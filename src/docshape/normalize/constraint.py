"""Markdown normalization: structural constraints plus frontmatter."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..errors import NormalizationError, map_to_metadata_cause
from ..metadata.sink import MetadataSink, NoopSink, new_attr, safe_record_error
from ..models.config import NormalizeParam
from ..models.documents import NormalizedMarkdownDoc
from ..models.events import AttributeKey
from ..urls import canonicalize
from .frontmatter import Canonicalizer, generate_frontmatter
from .structure import validate_structure

logger = logging.getLogger(__name__)


class MarkdownConstraint:
    """
    Turns rendered Markdown into a NormalizedMarkdownDoc.

    The body is validated first; frontmatter is only derived once every
    structural invariant holds. The body bytes are kept unchanged.

    Example:
        constraint = MarkdownConstraint(LoggingSink())
        doc = constraint.normalize(
            "https://docs.example.com/guide/install",
            markdown_bytes,
            NormalizeParam(app_version="1.0.0", fetched_at=fetched_at),
        )
        print(doc.frontmatter.title, doc.frontmatter.section)
    """

    def __init__(
        self,
        metadata_sink: Optional[MetadataSink] = None,
        canonicalizer: Canonicalizer = canonicalize,
    ):
        self._sink = metadata_sink or NoopSink()
        self._canonicalizer = canonicalizer

    def normalize(self, source_url: str, content: bytes, param: NormalizeParam) -> NormalizedMarkdownDoc:
        """
        Validate structure and attach frontmatter.

        Args:
            source_url: URL the page was fetched from
            content: Rendered Markdown bytes
            param: Per-page normalization configuration

        Returns:
            Immutable normalized document

        Raises:
            NormalizationError: On any structural violation or frontmatter failure
        """
        try:
            outline = validate_structure(content)
            frontmatter = generate_frontmatter(source_url, content, outline, param, self._canonicalizer)
        except NormalizationError as err:
            logger.warning("Normalization failed for %s: %s", source_url, err)
            safe_record_error(
                self._sink,
                observed_at=datetime.now(timezone.utc),
                component="normalize",
                action="MarkdownConstraint.normalize",
                cause=map_to_metadata_cause(err),
                details=str(err),
                attrs=[new_attr(AttributeKey.URL, source_url)],
            )
            raise

        logger.debug("Normalized %s as %s", source_url, frontmatter.doc_id)
        return NormalizedMarkdownDoc(frontmatter=frontmatter, content=content)
