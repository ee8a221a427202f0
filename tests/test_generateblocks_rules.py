"""Tests for the generateblocks rule family."""

from __future__ import annotations

import json

import pytest

from block_convert.core.converter import HtmlToBlocksConverter
from block_convert.core.rule import ORPHANED_TEXT_THRESHOLD


class TestElementRule:
    """Tests for container elements."""

    def test_attribute_order(self, converter: HtmlToBlocksConverter) -> None:
        """Test the canonical attribute key order."""
        block = converter.convert('<section class="intro" id="top"><p>x</p></section>').blocks[0]

        assert block.block_name == "generateblocks/element"
        assert list(block.attrs) == [
            "uniqueId",
            "tagName",
            "globalClasses",
            "htmlAttributes",
            "blockId",
            "metadata",
            "className",
        ]
        assert block.attrs["htmlAttributes"] == {"id": "top"}
        assert block.attrs["metadata"] == {"name": "Section Element"}
        assert block.attrs["blockId"].startswith(f"block-{block.attrs['uniqueId'][:8]}-")

    def test_opening_tag(self, converter: HtmlToBlocksConverter) -> None:
        """Test that the base class leads the user classes."""
        block = converter.convert('<section class="intro" id="top"><p>x</p></section>').blocks[0]
        assert block.content[0] == '<section class="gb-element intro" id="top">'
        assert block.content[-1] == "</section>"

    def test_embedded_content_renders_as_div(self, converter: HtmlToBlocksConverter) -> None:
        """Test that video and similar tags become divs that remember their tag."""
        block = converter.convert("<video><source src=\"a.mp4\"></video>").blocks[0]

        assert block.attrs["tagName"] == "div"
        assert block.attrs["htmlAttributes"]["data-original-tag"] == "video"
        assert block.content[0].startswith("<div")

    def test_long_loose_text_becomes_text_block(self, converter: HtmlToBlocksConverter) -> None:
        """Test that long container text is promoted to a span text block."""
        text = "x" * (ORPHANED_TEXT_THRESHOLD + 1)
        block = converter.convert(f"<div>{text}<hr></div>").blocks[0]

        span = block.children[0]
        assert span.block_name == "generateblocks/text"
        assert span.attrs["tagName"] == "span"
        assert span.attrs["content"] == text
        assert block.content[1] is None

    def test_short_loose_text_stays_inline(self, converter: HtmlToBlocksConverter) -> None:
        """Test that short container text stays literal content."""
        block = converter.convert("<div>Hello there<hr></div>").blocks[0]
        assert block.content[1] == "Hello there"
        assert block.is_consistent()

    def test_loose_text_escaped(self, converter: HtmlToBlocksConverter) -> None:
        """Test that promoted and inline container text is escaped in the markup."""
        html = "<div><span>x</span>this is long text &lt;img src=x&gt; here<hr>a &lt; b</div>"
        block = converter.convert(html).blocks[0]

        span = block.children[1]
        assert span.attrs["content"] == "this is long text <img src=x> here"
        assert span.html == '<span class="gb-text">this is long text &lt;img src=x&gt; here</span>'
        assert "a &lt; b" in block.content

    def test_semantic_mapping_off(self, converter: HtmlToBlocksConverter) -> None:
        """Test that unknown tags with children only match with semantic mapping."""
        html = "<mark><b>x</b></mark>"
        assert converter.convert(html).blocks[0].block_name == "generateblocks/element"
        result = converter.convert(html, {"semanticMapping": False})
        assert result.blocks[0].block_name == "core/html"


class TestTextRule:
    """Tests for text elements."""

    def test_heading(self, converter: HtmlToBlocksConverter) -> None:
        """Test a heading with a user class."""
        block = converter.convert('<h2 class="title">Hello</h2>').blocks[0]

        assert block.block_name == "generateblocks/text"
        assert list(block.attrs) == [
            "uniqueId",
            "tagName",
            "globalClasses",
            "content",
            "blockId",
            "metadata",
            "className",
        ]
        assert block.attrs["metadata"] == {"name": "H2 Text"}
        assert block.html == '<h2 class="gb-text title gb-text">Hello</h2>'

    def test_empty_text_falls_back(self, converter: HtmlToBlocksConverter) -> None:
        """Test that an empty text element is kept as raw HTML."""
        assert converter.convert("<p></p>").blocks[0].block_name == "core/html"

    def test_styles_dropped_by_default(self, converter: HtmlToBlocksConverter) -> None:
        """Test that inline styles only pass through when preserved."""
        html = '<p style="color:red">Hi</p>'
        assert "htmlAttributes" not in converter.convert(html).blocks[0].attrs

        block = converter.convert(html, {"preserveStyles": True}).blocks[0]
        assert block.attrs["htmlAttributes"] == {"style": "color:red"}

    def test_text_escaped_in_markup(self, converter: HtmlToBlocksConverter) -> None:
        """Test that literal angle brackets stay text in the markup and raw in the attribute."""
        block = converter.convert("<p>&lt;b&gt;bold&lt;/b&gt; &amp; more</p>").blocks[0]

        assert block.attrs["content"] == "<b>bold</b> & more"
        assert block.html.endswith(">&lt;b&gt;bold&lt;/b&gt; &amp; more</p>")
        assert "<b>" not in block.html

    def test_html_attributes_escaped(self, converter: HtmlToBlocksConverter) -> None:
        """Test that passthrough attribute values are escaped in the opening tag."""
        block = converter.convert('<p title="a &quot;b&quot; &amp; c">Hi</p>').blocks[0]

        assert block.attrs["htmlAttributes"] == {"title": 'a "b" & c'}
        assert ' title="a &quot;b&quot; &amp; c">Hi</p>' in block.html


class TestMediaRule:
    """Tests for images."""

    def test_image(self, converter: HtmlToBlocksConverter) -> None:
        """Test image attributes and self-closing markup."""
        block = converter.convert('<img class="photo" src="a.png" alt="A &amp; B" width="10">').blocks[0]

        assert block.block_name == "generateblocks/media"
        assert block.attrs["tagName"] == "img"
        assert block.attrs["htmlAttributes"] == {"src": "a.png", "alt": "A & B", "width": "10"}
        assert "className" not in block.attrs
        assert block.html == '<img class="photo" src="a.png" alt="A &amp; B" width="10"/>'


class TestButtonRule:
    """Tests for buttons."""

    def test_link_button(self, converter: HtmlToBlocksConverter) -> None:
        """Test a link styled as a button."""
        block = converter.convert('<a class="btn primary" href="/go" target="_blank">Go</a>').blocks[0]

        uid = block.attrs["uniqueId"]
        assert block.block_name == "generateblocks/text"
        assert block.attrs["tagName"] == "a"
        assert block.attrs["globalClasses"] == ["btn", "primary"]
        assert block.attrs["htmlAttributes"] == {"href": "/go", "target": "_blank"}
        assert block.attrs["styles"] == {}
        assert block.html == (
            f'<a class="gb-text btn primary gb-text-{uid}" href="/go" target="_blank">Go</a>'
        )

    def test_button_with_icon(self, converter: HtmlToBlocksConverter) -> None:
        """Test that icons are wrapped in shape spans before the text."""
        block = converter.convert('<button><svg viewBox="0 0 1 1"><path d="M0"></path></svg>Save</button>').blocks[0]

        assert block.attrs["styles"]["display"] == "inline-flex"
        assert ".gb-shape svg" in block.attrs["css"]
        assert '<span class="gb-shape"><svg' in block.html
        assert block.html.endswith("Save</button>")

    def test_plain_link_is_text(self, converter: HtmlToBlocksConverter) -> None:
        """Test that ordinary links are plain text blocks."""
        block = converter.convert('<a href="/about">About</a>').blocks[0]
        assert block.block_name == "generateblocks/text"
        assert block.attrs["metadata"] == {"name": "A Text"}


class TestShapeRule:
    """Tests for SVG shapes."""

    def test_svg(self, converter: HtmlToBlocksConverter) -> None:
        """Test an inline SVG with sizing."""
        block = converter.convert('<svg width="24" height="24" viewBox="0 0 24 24"><path d="M0"></path></svg>').blocks[0]

        uid = block.attrs["uniqueId"]
        assert block.block_name == "generateblocks/shape"
        assert block.attrs["styles"]["svg"] == {"width": "24px", "height": "24px", "fill": "currentColor"}
        assert block.attrs["css"].startswith(f".gb-shape-{uid}{{display:inline-flex;}}")
        assert block.html.startswith(f'<span class="gb-shape gb-shape-{uid}"><svg')

    def test_icon_only_button(self, converter: HtmlToBlocksConverter) -> None:
        """Test that an icon-only button becomes an element holding a divider shape."""
        block = converter.convert('<button aria-label="Close"><svg><path d="M0"></path></svg></button>').blocks[0]

        assert block.block_name == "generateblocks/element"
        assert block.attrs["htmlAttributes"] == {"aria-label": "Close"}
        assert block.children[0].block_name == "generateblocks/shape"
        assert block.children[0].attrs["className"] == "gb-shape--divider"
        assert block.content == ['<button class="gb-element" aria-label="Close">', None, "</button>"]


class TestQueryRule:
    """Tests for query loop elements."""

    def test_query_attributes(self, converter: HtmlToBlocksConverter) -> None:
        """Test that query parameters nest under the query attribute."""
        meta = json.dumps([{"key": "featured", "value": "1"}])
        html = (
            f'<query post-type="post" posts-per-page="6" meta-query=\'{meta}\' inherit-query="true">'
            "<looper><loop-item><h3>Title</h3></loop-item></looper>"
            '<query-page-numbers mid-size="2"></query-page-numbers>'
            "<query-no-results><p>Nothing</p></query-no-results>"
            "</query>"
        )
        block = converter.convert(html).blocks[0]

        assert block.block_name == "generateblocks/query"
        assert block.attrs["tagName"] == "section"
        assert block.attrs["inheritQuery"] is True
        assert block.attrs["query"] == {
            "post_type": "post",
            "posts_per_page": 6,
            "meta_query": [{"key": "featured", "value": "1"}],
        }
        names = [child.block_name for child in block.children]
        assert names == [
            "generateblocks/looper",
            "generateblocks/query-page-numbers",
            "generateblocks/query-no-results",
        ]

    def test_loop_item_has_no_class_name(self, converter: HtmlToBlocksConverter) -> None:
        """Test that loop items render their class but do not carry it."""
        query = converter.convert("<query><looper><loop-item><h3>T</h3></loop-item></looper></query>").blocks[0]
        loop_item = query.children[0].children[0]

        assert loop_item.attrs["tagName"] == "article"
        assert "className" not in loop_item.attrs
        assert loop_item.content[0].startswith('<article class="gb-loop-item"')

    def test_pagination_drops_children(self, converter: HtmlToBlocksConverter) -> None:
        """Test that pagination renders an empty nav."""
        html = '<query><query-page-numbers mid-size="2" show-all="true"><a>1</a></query-page-numbers></query>'
        pagination = converter.convert(html).blocks[0].children[0]

        assert pagination.attrs["midSize"] == 2
        assert pagination.attrs["showAll"] is True
        assert pagination.children == []
        assert pagination.html == '<nav class="gb-query-pagination"></nav>'

    @pytest.mark.parametrize("value", ["not json", "{broken"])
    def test_bad_meta_query_kept_as_string(self, converter: HtmlToBlocksConverter, value: str) -> None:
        """Test that an unparsable meta query is kept verbatim."""
        block = converter.convert(f'<query meta-query="{value}"></query>').blocks[0]
        assert block.attrs["query"]["meta_query"] == value


class TestFormRule:
    """Tests for form capture."""

    def test_form_kept_verbatim(self, converter: HtmlToBlocksConverter) -> None:
        """Test that a form becomes one HTML block with metadata."""
        html = (
            '<form method="post" action="/subscribe" data-block-id="x">'
            '<input type="email" name="email"><input type="hidden" name="t">'
            '<button type="submit">Join</button></form>'
        )
        block = converter.convert(html).blocks[0]

        assert block.block_name == "core/html"
        assert block.children == []
        assert block.attrs["metadata"] == {
            "name": "Form Block",
            "formType": "form",
            "method": "post",
            "action": "/subscribe",
            "containsFields": 2,
        }
        assert "data-block-id" not in block.html
        assert 'type="email"' in block.html

    def test_container_with_controls(self, converter: HtmlToBlocksConverter) -> None:
        """Test that a div holding form controls is captured whole."""
        block = converter.convert('<div class="search"><input type="search"></div>').blocks[0]

        assert block.block_name == "core/html"
        assert block.attrs["metadata"]["formType"] == "form-container"
        assert block.attrs["metadata"]["method"] == "GET"

    def test_convert_attributes_stripped(self, converter: HtmlToBlocksConverter) -> None:
        """Test that data-convert attributes are removed from the kept markup."""
        html = '<form data-convert-x="1"><input type="text"></form>'
        block = converter.convert(html).blocks[0]
        assert "data-convert-x" not in block.html
