"""Tests for Markdown rendering and frontmatter serialization."""

from datetime import datetime, timezone

import yaml
from docshape.conversion import FrontmatterBuilder, HtmlToMarkdown
from docshape.extraction import DomExtractor
from docshape.models import Frontmatter, NormalizedMarkdownDoc

URL = "https://docs.example.com/guide/page"
PARAGRAPH = "Docshape separates real documentation content from navigation and other site chrome."


def make_frontmatter(**overrides) -> Frontmatter:
    values = {
        "title": "Getting Started: a guide",
        "source_url": URL,
        "canonical_url": URL,
        "crawl_depth": 2,
        "section": "guide",
        "doc_id": "sha256:" + "a" * 64,
        "content_hash": "sha256:" + "b" * 64,
        "fetched_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        "crawler_version": "v1.0.0",
    }
    values.update(overrides)
    return Frontmatter(**values)


class TestHtmlToMarkdown:
    """Tests for HtmlToMarkdown."""

    def test_convert_headings_and_paragraphs(self):
        """Test ATX headings and paragraphs."""
        md = HtmlToMarkdown().convert("<h1>Title</h1><p>Body text.</p><h2>Sub</h2><p>More.</p>", URL)
        assert md == "# Title\n\nBody text.\n\n## Sub\n\nMore.\n"

    def test_relative_links_made_absolute(self):
        """Test links resolve against the source URL."""
        md = HtmlToMarkdown().convert('<p>See <a href="/api/auth">the API</a>.</p>', URL)
        assert "(https://docs.example.com/api/auth)" in md

    def test_anchor_links_untouched(self):
        """Test in-page anchors are left alone."""
        md = HtmlToMarkdown()._fix_relative_links("[top](#intro)", URL)
        assert md == "[top](#intro)"

    def test_no_line_wrapping(self):
        """Test long paragraphs stay on one line."""
        text = " ".join(["word"] * 60)
        md = HtmlToMarkdown().convert(f"<p>{text}</p>", URL)
        assert md == text + "\n"

    def test_clean_output(self):
        """Test trailing whitespace and blank runs are collapsed."""
        cleaned = HtmlToMarkdown()._clean_output("\n\n# A   \n\n\n\n\ntext  \n\n")
        assert cleaned == "# A\n\ntext\n"

    def test_render_uses_content_node(self):
        """Test only the extracted subtree is rendered."""
        html = (
            "<html><body><nav><a href='/x'>Menu</a></nav>"
            f"<main><h1>Guide</h1><p>{PARAGRAPH}</p></main></body></html>"
        ).encode()
        result = DomExtractor().extract(URL, html)
        md = HtmlToMarkdown().render(result, URL)
        assert isinstance(md, bytes)
        assert md.decode("utf-8") == f"# Guide\n\n{PARAGRAPH}\n"


class TestFrontmatterBuilder:
    """Tests for FrontmatterBuilder."""

    def test_build_round_trips(self):
        """Test the YAML block parses back to the same fields."""
        fm = make_frontmatter()
        text = FrontmatterBuilder().build(fm)
        assert text.startswith("---\n")
        assert text.endswith("---\n\n")

        data = yaml.safe_load(text.split("---\n")[1])
        assert data == fm.to_dict()

    def test_field_order(self):
        """Test fields keep declaration order."""
        text = FrontmatterBuilder().build(make_frontmatter())
        keys = [line.split(":", 1)[0] for line in text.splitlines()[1:-2]]
        assert keys == [
            "title",
            "source_url",
            "canonical_url",
            "crawl_depth",
            "section",
            "doc_id",
            "content_hash",
            "fetched_at",
            "crawler_version",
        ]

    def test_unicode_title(self):
        """Test non-ASCII titles are written verbatim."""
        text = FrontmatterBuilder().build(make_frontmatter(title="Übersicht"))
        assert "title: Übersicht" in text

    def test_serialize_document(self):
        """Test a normalized document serializes as frontmatter plus body."""
        doc = NormalizedMarkdownDoc(frontmatter=make_frontmatter(), content=b"# Title\n\nBody.\n")
        text = FrontmatterBuilder().serialize(doc)
        assert text.startswith("---\ntitle:")
        assert text.endswith("---\n\n# Title\n\nBody.\n")
