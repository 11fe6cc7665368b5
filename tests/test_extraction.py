"""Tests for content extraction layers and the extractor."""

import logging
from unittest.mock import MagicMock

import pytest
from docshape.errors import ErrorCause, ExtractionError
from docshape.extraction import (
    DensityScoringLayer,
    DomExtractor,
    KnownTemplateLayer,
    SemanticContainerLayer,
    parse_html,
)
from docshape.models import AttributeKey, ExtractParam, MetadataCause

PARAGRAPH = "Docshape separates real documentation content from navigation and other site chrome."
URL = "https://docs.example.com/guide/page"


def page(body: str) -> bytes:
    return f"<!DOCTYPE html><html><head><title>T</title></head><body>{body}</body></html>".encode()


class TestParseHtml:
    """Tests for DOM parsing and validation."""

    def test_parses_valid_document(self):
        """Test a document with an <html> root parses."""
        soup = parse_html(page(f"<p>{PARAGRAPH}</p>"))
        assert soup.find("p").get_text() == PARAGRAPH

    def test_rejects_plain_text(self):
        """Test non-HTML input is rejected as NOT_HTML."""
        with pytest.raises(ExtractionError) as exc_info:
            parse_html(b"just some plain text, not markup")
        assert exc_info.value.cause == ErrorCause.NOT_HTML
        assert exc_info.value.retryable is False

    def test_rejects_fragment_without_html_root(self):
        """Test an HTML fragment without <html> is rejected."""
        with pytest.raises(ExtractionError) as exc_info:
            parse_html(f"<div><p>{PARAGRAPH}</p></div>".encode())
        assert exc_info.value.cause == ErrorCause.NOT_HTML

    def test_decodes_declared_charset(self):
        """Test the meta charset is honoured."""
        html = '<html><head><meta charset="iso-8859-1"></head><body><p>Héllo</p></body></html>'
        soup = parse_html(html.encode("iso-8859-1"))
        assert soup.find("p").get_text() == "Héllo"


class TestSemanticContainerLayer:
    """Tests for Layer 1."""

    def test_prefers_main(self):
        """Test <main> wins over <article>."""
        soup = parse_html(
            page(f"<article><h1>Article</h1><p>{PARAGRAPH}</p></article><main><h1>Main</h1><p>{PARAGRAPH}</p></main>")
        )
        node = SemanticContainerLayer().try_extract(soup)
        assert node.name == "main"

    def test_skips_meaningless_main(self):
        """Test a short <main> falls through to <article>."""
        soup = parse_html(page(f"<main><p>Too short</p></main><article><h1>A</h1><p>{PARAGRAPH}</p></article>"))
        node = SemanticContainerLayer().try_extract(soup)
        assert node.name == "article"

    def test_role_main(self):
        """Test [role=main] is the last semantic fallback."""
        soup = parse_html(page(f'<div role="main"><p>{PARAGRAPH}</p></div>'))
        node = SemanticContainerLayer().try_extract(soup)
        assert node.get("role") == "main"

    def test_no_match(self):
        """Test None is returned when no semantic container exists."""
        soup = parse_html(page(f"<div><p>{PARAGRAPH}</p></div>"))
        assert SemanticContainerLayer().try_extract(soup) is None


class TestKnownTemplateLayer:
    """Tests for Layer 2."""

    def test_matches_framework_selector(self):
        """Test a known documentation container is found."""
        soup = parse_html(page(f'<div class="markdown-body"><h1>Readme</h1><p>{PARAGRAPH}</p></div>'))
        node = KnownTemplateLayer().try_extract(soup)
        assert "markdown-body" in node["class"]

    def test_custom_selectors_appended_without_duplicates(self):
        """Test custom selectors come after built-ins and are de-duplicated."""
        layer = KnownTemplateLayer(custom_selectors=[".content", ".my-docs"])
        assert layer.selectors.count(".content") == 1
        assert layer.selectors[-1] == ".my-docs"
        assert layer.selectors[0] == ".content"

    def test_custom_selector_matches(self):
        """Test a caller-supplied selector is tried."""
        soup = parse_html(page(f'<div class="my-docs"><p>{PARAGRAPH}</p></div>'))
        assert KnownTemplateLayer().try_extract(soup) is None
        node = KnownTemplateLayer(custom_selectors=[".my-docs"]).try_extract(soup)
        assert node["class"] == ["my-docs"]


class TestDensityScoringLayer:
    """Tests for Layer 3."""

    def test_prefers_specific_container_over_body(self):
        """Test the specificity bias picks the content div instead of <body>."""
        soup = parse_html(
            page(
                '<nav><a href="/a">Home</a><a href="/b">Guides</a></nav>'
                f'<div id="primary"><h1>Guide</h1><p>{PARAGRAPH}</p><p>{PARAGRAPH}</p></div>'
            )
        )
        node = DensityScoringLayer().try_extract(soup)
        assert node.name == "div"
        assert node["id"] == "primary"

    def test_does_not_modify_original(self):
        """Test chrome removal happens on a clone."""
        soup = parse_html(page(f'<nav>Menu</nav><div id="primary"><p>{PARAGRAPH}</p></div>'))
        DensityScoringLayer().try_extract(soup)
        assert soup.find("nav") is not None

    def test_ties_resolve_in_document_order(self):
        """Test equal-scoring siblings resolve to the first one."""
        soup = parse_html(page(f'<div id="first"><p>{PARAGRAPH}</p></div><div id="second"><p>{PARAGRAPH}</p></div>'))
        layer = DensityScoringLayer(ExtractParam(body_specificity_bias=1.0))
        best = layer.find_best_candidate(soup)
        # body outscores both halves; neither child reaches the full body score
        assert best.name == "body"

        soup = parse_html(page(f'<section id="a"><div id="inner"><p>{PARAGRAPH}</p></div></section>'))
        best = DensityScoringLayer().find_best_candidate(soup)
        # body, section and div score the same; the first non-body candidate wins the bias scan
        assert best.name == "section"

    def test_no_candidates_after_chrome_removal(self):
        """Test a page of pure chrome yields nothing."""
        soup = parse_html(page(f"<nav><p>{PARAGRAPH}</p></nav><footer><p>{PARAGRAPH}</p></footer>"))
        assert DensityScoringLayer().try_extract(soup) is None


class TestDomExtractor:
    """Tests for the layered extractor."""

    def test_layer_one_wins(self):
        """Test <main> beats a known template container."""
        html = page(
            f'<div class="markdown-body"><h1>Template</h1><p>{PARAGRAPH}</p></div>'
            f"<main><h1>Main</h1><p>{PARAGRAPH}</p></main>"
        )
        result = DomExtractor().extract(URL, html)
        assert result.layer == "semantic"
        assert result.content_node.name == "main"
        assert result.document_root is not None

    def test_falls_back_to_template(self):
        """Test Layer 2 is used when no semantic container exists."""
        html = page(f'<div class="rst-content"><h1>Sphinx</h1><p>{PARAGRAPH}</p></div>')
        result = DomExtractor().extract(URL, html)
        assert result.layer == "known_template"

    def test_falls_back_to_density(self):
        """Test Layer 3 is used as the last resort."""
        html = page(f'<div id="primary"><h1>Guide</h1><p>{PARAGRAPH}</p></div>')
        result = DomExtractor().extract(URL, html)
        assert result.layer == "density"
        assert result.content_node.find("h1").get_text() == "Guide"
        assert result.content_node.find_parent() is not None

    def test_nav_only_page_has_no_content(self):
        """Test text living only in <nav> yields NO_CONTENT."""
        html = page(f"<nav><p>{PARAGRAPH}</p><p>{PARAGRAPH}</p></nav>")
        with pytest.raises(ExtractionError) as exc_info:
            DomExtractor().extract(URL, html)
        assert exc_info.value.cause == ErrorCause.NO_CONTENT

    def test_failure_reported_to_sink(self):
        """Test failures are recorded with the source URL."""
        sink = MagicMock()
        with pytest.raises(ExtractionError):
            DomExtractor(sink).extract(URL, b"not html")

        sink.record_error.assert_called_once()
        kwargs = sink.record_error.call_args.kwargs
        assert kwargs["component"] == "extractor"
        assert kwargs["cause"] == MetadataCause.CONTENT_INVALID
        assert kwargs["attrs"][0].key == AttributeKey.URL
        assert kwargs["attrs"][0].value == URL

    def test_failure_logged_with_deferred_formatting(self, caplog):
        """Test the failure warning uses logger arguments, not a pre-built string."""
        with caplog.at_level(logging.WARNING, logger="docshape.extraction"):
            with pytest.raises(ExtractionError):
                DomExtractor().extract(URL, b"not html")

        records = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(records) == 1
        assert records[0].msg == "Extraction failed for %s: %s"
        assert records[0].args[0] == URL
        assert URL in records[0].getMessage()

    def test_sink_failure_does_not_change_outcome(self):
        """Test a broken sink cannot mask the classified error."""
        sink = MagicMock()
        sink.record_error.side_effect = RuntimeError("sink down")
        with pytest.raises(ExtractionError):
            DomExtractor(sink).extract(URL, b"not html")

    def test_success_does_not_touch_sink(self):
        """Test the sink only hears about failures."""
        sink = MagicMock()
        DomExtractor(sink).extract(URL, page(f"<main><p>{PARAGRAPH}</p></main>"))
        sink.record_error.assert_not_called()

    def test_extraction_is_idempotent(self):
        """Test identical bytes give an identical content subtree."""
        html = page(f'<nav>Menu</nav><div id="primary"><h1>Guide</h1><p>{PARAGRAPH}</p></div><div><p>x</p></div>')
        extractor = DomExtractor()
        first = extractor.extract(URL, html)
        second = extractor.extract(URL, html)
        assert str(first.content_node) == str(second.content_node)

    def test_custom_layers(self):
        """Test the layer sequence can be replaced."""
        html = page(f"<main><p>{PARAGRAPH}</p></main>")
        extractor = DomExtractor(layers=[DensityScoringLayer()])
        result = extractor.extract(URL, html)
        assert result.layer == "density"
