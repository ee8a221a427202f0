"""Paragraphs and spans to ``core/paragraph``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html
from block_convert.rules.gutenberg.base import GutenbergRule


class ParagraphRule(GutenbergRule):
    """Converts ``<p>`` and ``<span>``; spans render as paragraphs marked ``is-span``."""

    name = "gutenberg.paragraph"
    priority = 50
    supported_elements = ("p", "span")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in self.supported_elements

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        text = self.extract_text_content(element)
        if text:
            attrs["content"] = text
        attrs["blockId"] = self.block_id()

        if element.name.lower() == "span":
            attrs["className"] = f"{attrs['className']} is-span" if attrs.get("className") else "is-span"

        html = f"{self.build_gutenberg_tag('p', attrs)}{escape_html(text)}</p>"
        return Block(block_name="core/paragraph", attrs=attrs, content=[html], html=html)
