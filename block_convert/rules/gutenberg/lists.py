"""Ordered and unordered lists to ``core/list`` with ``core/list-item`` children."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import child_elements, escape_html, text_content
from block_convert.core.rule import render_html
from block_convert.rules.gutenberg.base import GutenbergRule


class ListRule(GutenbergRule):
    """Converts ``<ul>`` and ``<ol>``; each direct ``<li>`` becomes a list item with its text."""

    name = "gutenberg.list"
    priority = 70
    supported_elements = ("ul", "ol")
    wrapper_class = "wp-block-list"

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in self.supported_elements

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag_name = element.name.lower()
        attrs = self.gutenberg_attributes(element, context)
        if tag_name == "ol":
            attrs["ordered"] = True
        attrs["blockId"] = self.block_id()

        items = [
            self.list_item(text_content(li).strip())
            for li in child_elements(element)
            if li.name.lower() == "li"
        ]
        content: list[str | None] = [
            self.build_gutenberg_tag(tag_name, attrs),
            *[None] * len(items),
            f"</{tag_name}>",
        ]
        return Block(
            block_name="core/list",
            attrs=attrs,
            children=items,
            content=content,
            html=render_html(content, items),
        )

    def list_item(self, text: str) -> Block:
        html = f"<li>{escape_html(text)}</li>"
        return Block(
            block_name="core/list-item",
            attrs={"blockId": self.block_id()},
            content=[html],
            html=html,
        )
