"""Protocol definitions for Markdown rendering."""

from typing import Protocol

from ..models.documents import ExtractionResult


class MarkdownRenderer(Protocol):
    """
    Protocol for rendering extracted content to Markdown.

    Implementations render result.content_node and must not introduce
    structural problems the normalizer would not otherwise catch.
    """

    def render(self, result: ExtractionResult, url: str) -> bytes:
        """
        Render extracted content.

        Args:
            result: Extraction result to render
            url: Source URL (for resolving relative links)

        Returns:
            UTF-8 Markdown bytes
        """
        ...
