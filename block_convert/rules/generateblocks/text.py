"""Text elements to ``generateblocks/text``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import ContentType, build_attributes_string, escape_html
from block_convert.core.ids import generate_unique_id, short_id
from block_convert.core.rule import BaseRule, canonical_order

TEXT_ELEMENTS = ("h1", "h2", "h3", "h4", "h5", "h6", "p", "span", "button")


class TextRule(BaseRule):
    """Converts headings, paragraphs and other text-only elements."""

    name = "generateblocks.text"
    priority = 50
    supported_elements = TEXT_ELEMENTS

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if "-" in tag_name:
            return False
        if tag_name in TEXT_ELEMENTS:
            return True
        if context.semantic_mapping:
            return self.analyze_content(element) == ContentType.TEXT_ONLY
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag_name = element.name.lower()
        text = self.extract_text_content(element)

        if not text and context.fallback_to_html_block:
            return self.html_fallback(element)

        attrs = self.extract_attributes(element, "generateblocks/text", context)

        # The editor renders the base class on both sides of the user classes.
        classes = []
        if attrs.get("className"):
            classes.append(attrs["className"])
        classes.extend(attrs.get("globalClasses", []))
        if attrs.get("className"):
            classes.append(attrs["className"])

        class_attr = f' class="{" ".join(classes)}"' if classes else ""
        html_attrs = build_attributes_string(attrs.get("htmlAttributes"))
        if html_attrs:
            html_attrs = " " + html_attrs
        html = f"<{tag_name}{class_attr}{html_attrs}>{escape_html(text)}</{tag_name}>"

        return Block(
            block_name="generateblocks/text",
            attrs=attrs,
            content=[html],
            html=html,
        )


def span_text_block(text: str, context: ConversionContext) -> Block:
    """Wrap a label in the span text block used inside toggles and tab buttons."""
    attrs: dict = {"tagName": "span", "metadata": {"name": "Span Text"}, "className": "gb-text"}
    if context.generate_unique_ids:
        unique_id = generate_unique_id()
        attrs["uniqueId"] = unique_id
        attrs["blockId"] = f"block-{unique_id[:8]}-{short_id()}"

    html = f'<span class="gb-text gb-text">{escape_html(text)}</span>'
    return Block(
        block_name="generateblocks/text", attrs=canonical_order(attrs), content=[html], html=html
    )
