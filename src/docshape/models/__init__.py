"""docshape configuration, document and event models."""

from .config import ContentScoreMultiplier, ExtractParam, MeaningfulThreshold, NormalizeParam
from .documents import ExtractionResult, Frontmatter, NormalizedMarkdownDoc
from .events import (
    ArtifactKind,
    ArtifactRecord,
    Attribute,
    AttributeKey,
    ErrorRecord,
    MetadataCause,
)

__all__ = [
    # Config
    "ContentScoreMultiplier",
    "ExtractParam",
    "MeaningfulThreshold",
    "NormalizeParam",
    # Documents
    "ExtractionResult",
    "Frontmatter",
    "NormalizedMarkdownDoc",
    # Events
    "ArtifactKind",
    "ArtifactRecord",
    "Attribute",
    "AttributeKey",
    "ErrorRecord",
    "MetadataCause",
]
