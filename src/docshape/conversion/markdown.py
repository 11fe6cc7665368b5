"""HTML to Markdown rendering and frontmatter serialization."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

import html2text
import yaml

from ..models.documents import ExtractionResult, Frontmatter, NormalizedMarkdownDoc

logger = logging.getLogger(__name__)


class HtmlToMarkdown:
    """
    Renders an extracted content node to Markdown.

    Uses html2text with settings tuned for documentation: ATX headings, no
    line wrapping, code blocks kept verbatim.

    Example:
        renderer = HtmlToMarkdown()
        markdown_bytes = renderer.render(extraction_result, "https://docs.example.com/page")
    """

    def __init__(
        self,
        inline_links: bool = True,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        escape_snob: bool = False,
    ):
        """
        Initialize the renderer.

        Args:
            inline_links: Use inline [text](url) vs reference style
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            escape_snob: Escape every Markdown special char
        """
        self._inline_links = inline_links
        self._ignore_images = ignore_images
        self._ignore_tables = ignore_tables
        self._unicode_snob = unicode_snob
        self._escape_snob = escape_snob

    def _new_converter(self, base_url: str) -> html2text.HTML2Text:
        # HTML2Text keeps per-document state, so every call gets its own instance
        converter = html2text.HTML2Text(baseurl=base_url, bodywidth=0)
        converter.inline_links = self._inline_links
        converter.wrap_links = False
        converter.protect_links = False
        converter.ignore_images = self._ignore_images
        converter.ignore_tables = self._ignore_tables
        converter.unicode_snob = self._unicode_snob
        converter.escape_snob = self._escape_snob
        converter.mark_code = False
        converter.default_image_alt = ""
        converter.single_line_break = False
        return converter

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        # Ensure single newline at end
        return markdown.strip() + "\n"

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            # Skip anchors and already absolute URLs
            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str) -> str:
        """
        Convert an HTML fragment to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links

        Returns:
            Markdown string
        """
        markdown = self._new_converter(url).handle(html)
        markdown = self._clean_output(markdown)
        return self._fix_relative_links(markdown, url)

    def render(self, result: ExtractionResult, url: str) -> bytes:
        """
        Render the content node of an extraction result.

        Args:
            result: Extraction result whose content_node is rendered
            url: Source URL for resolving relative links

        Returns:
            UTF-8 Markdown bytes
        """
        markdown = self.convert(str(result.content_node), url)
        logger.debug("Rendered %s to %d chars of Markdown", url, len(markdown))
        return markdown.encode("utf-8")


class FrontmatterBuilder:
    """
    Serializes Frontmatter as a YAML block.

    Example:
        text = FrontmatterBuilder().serialize(doc)
    """

    def build(self, frontmatter: Frontmatter) -> str:
        """
        Build the YAML frontmatter string.

        Args:
            frontmatter: Frontmatter to serialize (fields keep declaration order)

        Returns:
            YAML frontmatter string with --- delimiters and a trailing blank line
        """
        body = yaml.safe_dump(
            frontmatter.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        return f"---\n{body}---\n\n"

    def serialize(self, doc: NormalizedMarkdownDoc) -> str:
        """Return the frontmatter block followed by the document body."""
        return self.build(doc.frontmatter) + doc.content.decode("utf-8")
