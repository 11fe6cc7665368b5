"""Per-page pipeline: extract, render, normalize."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .conversion.markdown import HtmlToMarkdown
from .conversion.protocols import MarkdownRenderer
from .extraction.extractor import DomExtractor
from .metadata.sink import MetadataSink, NoopSink, new_attr, safe_record_artifact
from .models.config import NormalizeParam
from .models.documents import NormalizedMarkdownDoc
from .models.events import ArtifactKind, AttributeKey
from .normalize.constraint import MarkdownConstraint

logger = logging.getLogger(__name__)


@dataclass
class DocumentPipeline:
    """
    Processes one fetched page into a NormalizedMarkdownDoc.

    Steps run in order: content extraction, Markdown rendering, structural
    normalization. A failing step raises its ClassifiedError (already
    reported to the sink by the step itself) and nothing is returned. On
    success one MARKDOWN artifact is recorded.

    The pipeline keeps no per-page state, so one instance can be shared by
    many worker threads.

    Example:
        sink = MemorySink()
        pipeline = DocumentPipeline(
            extractor=DomExtractor(sink),
            constraint=MarkdownConstraint(sink),
            sink=sink,
        )
        doc = pipeline.process(url, html_bytes, NormalizeParam(app_version="1.0.0", fetched_at=now))
        Path("out.md").write_text(FrontmatterBuilder().serialize(doc))
    """

    extractor: DomExtractor = field(default_factory=DomExtractor)
    renderer: MarkdownRenderer = field(default_factory=HtmlToMarkdown)
    constraint: MarkdownConstraint = field(default_factory=MarkdownConstraint)
    sink: MetadataSink = field(default_factory=NoopSink)

    def process(
        self,
        source_url: str,
        html: bytes,
        param: NormalizeParam,
        output_path: Optional[Path] = None,
    ) -> NormalizedMarkdownDoc:
        """
        Run the full pipeline for one page.

        Args:
            source_url: URL the page was fetched from
            html: Raw HTML bytes
            param: Normalization configuration for this page
            output_path: Where the caller will write the document, if known

        Returns:
            The normalized document

        Raises:
            ClassifiedError: From the first failing step
        """
        result = self.extractor.extract(source_url, html)
        markdown = self.renderer.render(result, source_url)
        doc = self.constraint.normalize(source_url, markdown, param)

        attrs = [new_attr(AttributeKey.URL, source_url)]
        if output_path is not None:
            attrs.append(new_attr(AttributeKey.WRITE_PATH, output_path))
        attrs.append(new_attr(AttributeKey.FIELD, doc.frontmatter.doc_id))
        attrs.append(new_attr(AttributeKey.FIELD, doc.frontmatter.content_hash))

        safe_record_artifact(
            self.sink,
            kind=ArtifactKind.MARKDOWN,
            path=str(output_path) if output_path is not None else doc.frontmatter.canonical_url,
            attrs=attrs,
        )
        logger.info("Processed %s via %s layer -> %r", source_url, result.layer, doc.frontmatter.title)
        return doc
