"""Tests for the Greenshift universal element rule."""

from __future__ import annotations

import re

import pytest

from block_convert.core.converter import HtmlToBlocksConverter
from block_convert.rules.greenshift.element import DEFAULT_IMAGE_SIZE, button_style, media_id

LOCAL_ID_RE = re.compile(r"^gsbp-[0-9a-f]{7}$")


class TestHelpers:
    """Tests for module-level helpers."""

    def test_media_id(self) -> None:
        """Test the stable id range and value."""
        assert media_id("a") == 197
        assert media_id("/uploads/photo.jpg") == media_id("/uploads/photo.jpg")
        assert 100 <= media_id("https://example.com/some/long/image-name.png") < 1100

    @pytest.mark.parametrize(
        ("classes", "expected"),
        [
            ("btn btn-primary", "primary"),
            ("button secondary", "secondary"),
            ("btn-outline", "outline"),
            ("btn", "default"),
        ],
    )
    def test_button_style(self, classes: str, expected: str) -> None:
        """Test style detection from classes."""
        assert button_style(classes) == expected


class TestGreenshiftElementRule:
    """Tests for element conversion."""

    def test_text_element(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test identifiers, tag and text attributes of a heading."""
        block = greenshift_converter.convert('<h2 class="title">Hello</h2>').blocks[0]
        local_id = block.attrs["id"]

        assert block.block_name == "greenshift-blocks/element"
        assert LOCAL_ID_RE.match(local_id)
        assert block.attrs["localId"] == local_id
        assert block.attrs["blockId"].startswith("block-")
        assert block.attrs["tag"] == "h2"
        assert block.attrs["type"] == "text"
        assert block.attrs["textContent"] == "Hello"
        assert block.attrs["innerText"] == "Hello"
        assert block.html == f'<h2 class="title {local_id}">Hello</h2>'

    def test_div_omits_tag(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that divs carry no tag and skip empty children."""
        block = greenshift_converter.convert("<div><p>A</p><span></span></div>").blocks[0]

        assert "tag" not in block.attrs
        assert block.attrs["type"] == "inner"
        assert len(block.children) == 1
        assert block.children[0].attrs["tag"] == "p"
        assert block.is_consistent()

    def test_image(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test image attributes and self-closing markup."""
        block = greenshift_converter.convert('<img src="/a.png" alt="A">').blocks[0]
        local_id = block.attrs["id"]

        assert block.attrs["src"] == "/a.png"
        assert block.attrs["mediaid"] == media_id("/a.png")
        assert block.attrs["originalWidth"] == DEFAULT_IMAGE_SIZE
        assert block.attrs["originalHeight"] == DEFAULT_IMAGE_SIZE
        assert block.children == []
        assert block.html == (
            f'<img class="{local_id}" src="/a.png" loading="lazy" width="1240" height="1240" alt="A"/>'
        )

    def test_image_size(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that explicit sizes are parsed as integers."""
        block = greenshift_converter.convert('<img src="/a.png" width="300px" height="200">').blocks[0]
        assert block.attrs["originalWidth"] == 300
        assert block.attrs["originalHeight"] == 200

    def test_attributes(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test id mapping, data/aria passthrough and dynamic attributes."""
        html = '<div id="hero" data-x="1" aria-label="Hero" itemprop="name" title="t"><p>x</p></div>'
        block = greenshift_converter.convert(html).blocks[0]

        assert block.attrs["id"] == "gsbp-hero"
        assert block.attrs["localId"] == "gsbp-hero"
        assert block.attrs["data-x"] == "1"
        assert block.attrs["aria-label"] == "Hero"
        assert block.attrs["dynamicAttributes"] == [{"name": "itemprop", "value": "name"}]
        assert block.content[0] == '<div class="gsbp-hero" data-x="1" aria-label="Hero" itemprop="name">'

    def test_link_button(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that button-classed links are flagged as buttons."""
        block = greenshift_converter.convert('<a class="btn btn-primary" href="/go">Go</a>').blocks[0]
        local_id = block.attrs["id"]

        assert block.attrs["isButton"] is True
        assert block.attrs["buttonStyle"] == "primary"
        assert block.attrs["href"] == "/go"
        assert block.html == f'<a class="btn btn-primary {local_id}" href="/go">Go</a>'

    def test_svg_icon(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test SVG icons keep only their first path in the markup."""
        html = '<svg viewBox="0 0 10 10"><path d="M0"></path><path d="M1"></path></svg>'
        block = greenshift_converter.convert(html).blocks[0]
        icon = block.attrs["icon"]

        assert icon["type"] == "svg"
        assert icon["icon"]["svg"].startswith('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"')
        assert block.children == []
        assert block.html.startswith('<svg viewBox="0 0 10 10"')
        assert '<path xmlns="http://www.w3.org/2000/svg" d="M0"/>' in block.html
        assert 'd="M1"' not in block.html

    def test_form_control(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that standalone inputs are marked as form elements."""
        block = greenshift_converter.convert('<input type="text" name="q" placeholder="Search">').blocks[0]

        assert block.attrs["isFormElement"] is True
        assert block.attrs["formType"] == "input"
        assert "dynamicAttributes" not in block.attrs
        assert block.html == f'<input class="{block.attrs["id"]}"/>'

    def test_bare_text(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that bare top-level text becomes a text element."""
        block = greenshift_converter.convert("Just words").blocks[0]

        assert block.block_name == "greenshift-blocks/element"
        assert block.attrs["type"] == "text"
        assert block.html == "<p>Just words</p>"

    def test_inline_text_escaped(self, greenshift_converter: HtmlToBlocksConverter) -> None:
        """Test that loose text beside child elements is escaped in the markup."""
        block = greenshift_converter.convert("<div><p>A</p>x &lt; y</div>").blocks[0]
        assert block.content[-2] == "x &lt; y"
