"""Tests for BlocksToHtmlConverter."""

import logging

import pytest

from block_convert.core.converter import HtmlToBlocksConverter
from block_convert.core.extractor import BlocksToHtmlConverter, format_html, parse_block_attributes

MARKUP = (
    '<!-- wp:generateblocks/element {"uniqueId":"a1","tagName":"section"} -->'
    '<section class="gb-element">\n'
    '<!-- wp:generateblocks/text {"uniqueId":"b2","tagName":"h2"} --><h2 class="gb-text">Title</h2>\n'
    "<!-- /wp:generateblocks/text -->\n"
    '<!-- wp:generateblocks/media {"uniqueId":"c3","tagName":"img"} /-->\n'
    "</section>\n"
    "<!-- /wp:generateblocks/element -->"
)


@pytest.fixture
def extractor() -> BlocksToHtmlConverter:
    """Create a reverse extractor."""
    return BlocksToHtmlConverter()


class TestStripToHtml:
    """Tests for removing block markers."""

    def test_markers_removed_and_indented(self, extractor: BlocksToHtmlConverter) -> None:
        """Test that markers vanish and the HTML is re-indented."""
        html = extractor.strip_to_html(MARKUP)

        assert "wp:" not in html
        assert html.splitlines() == [
            '<section class="gb-element">',
            '  <h2 class="gb-text">',
            "    Title",
            "  </h2>",
            "</section>",
        ]

    def test_empty_markup(self, extractor: BlocksToHtmlConverter) -> None:
        """Test that empty and blank markup yield an empty string."""
        assert extractor.strip_to_html("") == ""
        assert extractor.strip_to_html("  \n ") == ""

    def test_void_elements_do_not_indent(self) -> None:
        """Test that void and self-closing tags keep the indent level."""
        assert format_html("<div><img src=\"a.png\"><br/><p>x</p></div>").splitlines() == [
            "<div>",
            '  <img src="a.png">',
            "  <br/>",
            "  <p>",
            "    x",
            "  </p>",
            "</div>",
        ]


class TestExtractBlocks:
    """Tests for marker extraction."""

    def test_finds_every_opening_marker(self, extractor: BlocksToHtmlConverter) -> None:
        """Test that nested and self-closing markers are all found."""
        markers = extractor.extract_blocks(MARKUP)

        assert [marker.name for marker in markers] == [
            "generateblocks/element",
            "generateblocks/text",
            "generateblocks/media",
        ]
        assert markers[1].attributes == {"uniqueId": "b2", "tagName": "h2"}
        assert markers[2].full_match.endswith("/-->")

    def test_marker_without_attributes(self, extractor: BlocksToHtmlConverter) -> None:
        """Test a marker with no payload."""
        markers = extractor.extract_blocks("<!-- wp:core/separator /-->")
        assert markers[0].name == "core/separator"
        assert markers[0].attributes == {}


class TestAnalyze:
    """Tests for structural analysis."""

    def test_counts(self, extractor: BlocksToHtmlConverter) -> None:
        """Test counts by name and family, and the element list."""
        analysis = extractor.analyze(MARKUP)

        assert analysis.total_blocks == 3
        assert analysis.block_types == {
            "generateblocks/element": 1,
            "generateblocks/text": 1,
            "generateblocks/media": 1,
        }
        assert analysis.family_counts == {"generateblocks": 3}
        assert analysis.elements == ["section", "h2", "img"]
        assert analysis.greenshift_blocks == 0

    def test_malformed_payload_is_counted(
        self, extractor: BlocksToHtmlConverter, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that bad attribute JSON does not stop the analysis."""
        markup = '<!-- wp:family/kind {"bad json--><p>x</p><!-- /wp:family/kind -->'

        with caplog.at_level(logging.WARNING):
            analysis = extractor.analyze(markup)
            markers = extractor.extract_blocks(markup)

        assert analysis.total_blocks == 1
        assert analysis.block_types == {"family/kind": 1}
        assert markers[0].attributes == {}
        assert "Failed to parse block attributes" in caplog.text

    def test_non_object_payload(self) -> None:
        """Test that a JSON payload that is not an object is ignored."""
        assert parse_block_attributes("[1, 2]") == {}
        assert parse_block_attributes(None) == {}

    def test_convert_with_analysis(self, extractor: BlocksToHtmlConverter) -> None:
        """Test the combined extraction."""
        result = extractor.convert_with_analysis(MARKUP)
        assert result["html"].startswith("<section")
        assert result["analysis"].total_blocks == 3


class TestRoundTrip:
    """Tests running forward conversion then extraction."""

    def test_forward_then_reverse(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test that extraction recovers the converted elements."""
        result = converter.convert(hero_html)
        extractor = BlocksToHtmlConverter()

        html = extractor.strip_to_html(result.minified_markup)
        analysis = extractor.analyze(result.minified_markup)

        assert "wp:" not in html
        assert "Welcome" in html
        assert "Get started" in html
        assert analysis.total_blocks == result.stats.total_blocks
        assert analysis.elements == ["div", "h1", "p"]

    def test_comment_terminator_in_text(self, converter: HtmlToBlocksConverter) -> None:
        """Test that text containing "-->" survives the trip without breaking its marker."""
        result = converter.convert("<p>Go --> next</p>")
        extractor = BlocksToHtmlConverter()

        html = extractor.strip_to_html(result.minified_markup)
        markers = extractor.extract_blocks(result.minified_markup)

        assert "uniqueId" not in html
        assert "Go --&gt; next" in html
        assert [marker.name for marker in markers] == ["generateblocks/text"]
        assert markers[0].attributes["content"] == "Go --> next"

    def test_minified_payload_matches_unminified(self, converter: HtmlToBlocksConverter) -> None:
        """Test that minification leaves attribute payloads byte-identical."""
        result = converter.convert("<div><p>if a > b then c < d</p></div>")
        extractor = BlocksToHtmlConverter()

        minified = extractor.extract_blocks(result.minified_markup)
        unminified = extractor.extract_blocks(result.unminified_markup)

        assert [m.full_match for m in minified] == [m.full_match for m in unminified]
        assert minified[1].attributes["content"] == "if a > b then c < d"
