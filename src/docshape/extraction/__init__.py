"""Content isolation: parse HTML and find the documentation container."""

from .chrome import remove_chrome
from .dom import parse_html
from .extractor import DomExtractor
from .layers import (
    DensityScoringLayer,
    ExtractionLayer,
    KnownTemplateLayer,
    SemanticContainerLayer,
    default_layers,
)
from .selectors import KNOWN_DOC_SELECTORS, get_all_selectors, merge_selectors
from .stats import collect_stats, content_score, is_meaningful

__all__ = [
    # Orchestrator
    "DomExtractor",
    # Layers
    "ExtractionLayer",
    "SemanticContainerLayer",
    "KnownTemplateLayer",
    "DensityScoringLayer",
    "default_layers",
    # Building blocks
    "parse_html",
    "remove_chrome",
    "collect_stats",
    "content_score",
    "is_meaningful",
    "KNOWN_DOC_SELECTORS",
    "get_all_selectors",
    "merge_selectors",
]
