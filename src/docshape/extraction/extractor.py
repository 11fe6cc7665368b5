"""Main content extraction from HTML pages."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ..errors import ErrorCause, ExtractionError, map_to_metadata_cause
from ..metadata.sink import MetadataSink, NoopSink, new_attr, safe_record_error
from ..models.config import ExtractParam
from ..models.documents import ExtractionResult
from ..models.events import AttributeKey
from .dom import parse_html
from .layers import ExtractionLayer, default_layers

logger = logging.getLogger(__name__)


def owning_document(node: Tag) -> BeautifulSoup:
    """Return the document a node belongs to."""
    root = node
    while root.parent is not None:
        root = root.parent
    if not isinstance(root, BeautifulSoup):
        raise ValueError(f"<{node.name}> is not attached to a document")
    return root


class DomExtractor:
    """
    Isolates the main documentation content of an HTML page.

    Layers are tried in order and the first meaningful container wins:
    1. Semantic containers (<main>, <article>, [role="main"])
    2. Known documentation framework selectors (plus custom selectors)
    3. Chrome removal and text-density scoring on a cloned document

    If every layer misses, extraction fails with NO_CONTENT. Failures are
    reported to the metadata sink and re-raised; no layer is retried.

    Example:
        extractor = DomExtractor(LoggingSink())
        result = extractor.extract("https://docs.example.com/page", html_bytes)
        print(result.content_node.get_text())
    """

    def __init__(
        self,
        metadata_sink: Optional[MetadataSink] = None,
        params: Optional[ExtractParam] = None,
        layers: Optional[Sequence[ExtractionLayer]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            metadata_sink: Sink receiving terminal failures (discarded if None)
            params: Scoring and threshold configuration (defaults if None)
            layers: Layer sequence to use instead of the default three
        """
        self._sink = metadata_sink or NoopSink()
        self._params = params or ExtractParam()
        self._layers = list(layers) if layers is not None else default_layers(self._params)

    @property
    def params(self) -> ExtractParam:
        return self._params

    def extract(self, source_url: str, html: bytes) -> ExtractionResult:
        """
        Extract the main content container from an HTML page.

        Args:
            source_url: URL the page was fetched from (for reporting)
            html: Raw HTML bytes

        Returns:
            ExtractionResult referencing the content node

        Raises:
            ExtractionError: NOT_HTML or NO_CONTENT
        """
        try:
            return self._extract(html)
        except ExtractionError as err:
            logger.warning("Extraction failed for %s: %s", source_url, err)
            safe_record_error(
                self._sink,
                observed_at=datetime.now(timezone.utc),
                component="extractor",
                action="DomExtractor.extract",
                cause=map_to_metadata_cause(err),
                details=str(err),
                attrs=[new_attr(AttributeKey.URL, source_url)],
            )
            raise

    def _extract(self, html: bytes) -> ExtractionResult:
        soup = parse_html(html)

        for layer in self._layers:
            node = layer.try_extract(soup)
            if node is not None:
                logger.debug("Layer %r found <%s> content", layer.name, node.name)
                return ExtractionResult(
                    document_root=owning_document(node),
                    content_node=node,
                    layer=layer.name,
                )

        raise ExtractionError("no meaningful content container found", ErrorCause.NO_CONTENT)
