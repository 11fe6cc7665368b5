"""
docshape - Isolate documentation content from HTML pages and normalize it
into deterministic, structurally validated Markdown for RAG ingestion.

Usage:
    from datetime import datetime, timezone
    from docshape import DocumentPipeline, FrontmatterBuilder, NormalizeParam

    pipeline = DocumentPipeline()
    doc = pipeline.process(
        "https://docs.example.com/guide/install",
        html_bytes,
        NormalizeParam(app_version="1.0.0", fetched_at=datetime.now(timezone.utc)),
    )
    print(doc.frontmatter.doc_id)
    print(FrontmatterBuilder().serialize(doc))
"""

__version__ = "1.0.0"

from .conversion import FrontmatterBuilder, HtmlToMarkdown, MarkdownRenderer
from .errors import (
    ClassifiedError,
    ErrorCause,
    ExtractionError,
    NormalizationError,
    Severity,
    map_to_metadata_cause,
)
from .extraction import DomExtractor, is_meaningful, parse_html
from .hashing import HashAlgo, UnsupportedHashAlgorithm, hash_bytes
from .logging_config import setup_logging
from .metadata import LoggingSink, MemorySink, MetadataSink, NoopSink
from .models import (
    ContentScoreMultiplier,
    ExtractionResult,
    ExtractParam,
    Frontmatter,
    MeaningfulThreshold,
    NormalizedMarkdownDoc,
    NormalizeParam,
)
from .normalize import MarkdownConstraint, validate_structure
from .pipeline import DocumentPipeline
from .urls import canonicalize

__all__ = [
    "__version__",
    # Pipeline
    "DocumentPipeline",
    "DomExtractor",
    "MarkdownConstraint",
    "HtmlToMarkdown",
    "MarkdownRenderer",
    "FrontmatterBuilder",
    # Building blocks
    "parse_html",
    "is_meaningful",
    "validate_structure",
    "canonicalize",
    "hash_bytes",
    "HashAlgo",
    # Config
    "ExtractParam",
    "ContentScoreMultiplier",
    "MeaningfulThreshold",
    "NormalizeParam",
    # Documents
    "ExtractionResult",
    "Frontmatter",
    "NormalizedMarkdownDoc",
    # Errors
    "ClassifiedError",
    "ExtractionError",
    "NormalizationError",
    "ErrorCause",
    "Severity",
    "UnsupportedHashAlgorithm",
    "map_to_metadata_cause",
    # Observability
    "MetadataSink",
    "NoopSink",
    "LoggingSink",
    "MemorySink",
    "setup_logging",
]
