"""Structural normalization of rendered Markdown."""

from .constraint import MarkdownConstraint
from .frontmatter import derive_section, extract_title, generate_frontmatter
from .structure import DocumentOutline, Heading, scan_outline, validate_structure

__all__ = [
    "MarkdownConstraint",
    "validate_structure",
    "scan_outline",
    "DocumentOutline",
    "Heading",
    "extract_title",
    "derive_section",
    "generate_frontmatter",
]
