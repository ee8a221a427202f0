"""Disclosure widgets to ``core/details``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import child_elements, escape_html, text_content
from block_convert.core.rule import render_html
from block_convert.rules.gutenberg.base import GutenbergRule

EMPTY_PLACEHOLDER = "Type / to add a hidden block"


class DetailsRule(GutenbergRule):
    """Converts ``<details>``.

    The summary text becomes an attribute and literal markup; every other
    child element is converted through the registry. An empty body gets a
    placeholder paragraph.
    """

    name = "gutenberg.details"
    priority = 65
    supported_elements = ("details",)
    wrapper_class = "wp-block-details"

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() == "details"

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        attrs["blockId"] = self.block_id()

        summary = element.find("summary")
        summary_text = text_content(summary).strip() if summary is not None else ""
        if summary_text:
            attrs["summary"] = summary_text

        body = [child for child in child_elements(element) if child.name.lower() != "summary"]
        if body:
            children = [self.convert_child(child, context) for child in body]
        else:
            children = [self.placeholder_paragraph()]

        content: list[str | None] = [
            self.build_gutenberg_tag("details", attrs),
            f"<summary>{escape_html(summary_text)}</summary>",
            *[None] * len(children),
            "</details>",
        ]
        return Block(
            block_name="core/details",
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def placeholder_paragraph(self) -> Block:
        html = "<p></p>"
        return Block(
            block_name="core/paragraph",
            attrs={"placeholder": EMPTY_PLACEHOLDER, "blockId": self.block_id()},
            content=[html],
            html=html,
        )
