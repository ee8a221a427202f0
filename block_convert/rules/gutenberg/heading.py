"""Headings to ``core/heading``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html
from block_convert.rules.gutenberg.base import GutenbergRule

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class HeadingRule(GutenbergRule):
    """Converts ``<h1>`` to ``<h6>``."""

    name = "gutenberg.heading"
    priority = 60
    supported_elements = HEADING_TAGS
    wrapper_class = "wp-block-heading"

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in HEADING_TAGS

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag_name = element.name.lower()
        text = self.extract_text_content(element)

        attrs = self.gutenberg_attributes(element, context)
        attrs["level"] = int(tag_name[1])
        if text:
            attrs["content"] = text
        attrs["blockId"] = self.block_id()

        html = f"{self.build_gutenberg_tag(tag_name, attrs)}{escape_html(text)}</{tag_name}>"
        return Block(block_name="core/heading", attrs=attrs, content=[html], html=html)
