"""Rendering of extracted content to Markdown, and frontmatter serialization."""

from .markdown import FrontmatterBuilder, HtmlToMarkdown
from .protocols import MarkdownRenderer

__all__ = [
    # Protocols
    "MarkdownRenderer",
    # Implementations
    "HtmlToMarkdown",
    "FrontmatterBuilder",
]
