"""Accordion custom elements to ``generateblocks-pro`` accordion blocks.

``<accordion>`` holds ``<accordion-item>`` elements, each with an
``<accordion-toggle>`` label and an ``<accordion-content>`` panel. All four
render as ``div``.
"""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.rule import BaseRule, canonical_order, render_html
from block_convert.rules.generateblocks.text import span_text_block

ACCORDION_ELEMENTS = {
    "accordion": "generateblocks-pro/accordion",
    "accordion-item": "generateblocks-pro/accordion-item",
    "accordion-toggle": "generateblocks-pro/accordion-toggle",
    "accordion-content": "generateblocks-pro/accordion-content",
}

ACCORDION_TAG = "div"

# Authoring attributes that never reach the rendered tag.
_AUTHORING_ATTRIBUTES = ("tag",)


class AccordionRule(BaseRule):
    """Converts accordion custom elements."""

    name = "generateblocks-pro.accordion"
    priority = 75
    supported_elements = tuple(ACCORDION_ELEMENTS)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in ACCORDION_ELEMENTS

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag = element.name.lower()
        block_name = ACCORDION_ELEMENTS[tag]
        attrs = self.accordion_attributes(element, block_name, context)

        if tag == "accordion-toggle":
            return self.convert_toggle(element, block_name, attrs, context)
        if tag == "accordion-content" and attrs.get("uniqueId"):
            attrs.setdefault("htmlAttributes", {})["id"] = f"gb-accordion-content-{attrs['uniqueId']}"
            attrs = canonical_order(attrs)

        children, content = self.convert_children(element, context, promote_text=False)
        opening_tag = self.build_opening_tag(ACCORDION_TAG, attrs, block_name)
        content = [opening_tag, *content, f"</{ACCORDION_TAG}>"]
        return Block(
            block_name=block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def convert_toggle(
        self, element: Tag, block_name: str, attrs: dict[str, Any], context: ConversionContext
    ) -> Block:
        """The toggle's text becomes a single span text block."""
        if attrs.get("uniqueId"):
            attrs.setdefault("htmlAttributes", {})["id"] = f"gb-accordion-toggle-{attrs['uniqueId']}"
        attrs["className"] = "gb-accordion__toggle"
        attrs = canonical_order(attrs)

        label = span_text_block(self.extract_text_content(element), context)
        content: list[str | None] = [
            self.build_opening_tag(ACCORDION_TAG, attrs, block_name),
            None,
            f"</{ACCORDION_TAG}>",
        ]
        return Block(
            block_name=block_name,
            attrs=attrs,
            children=[label],
            content=content,
            html=render_html(content, [label]),
        )

    def accordion_attributes(
        self, element: Tag, block_name: str, context: ConversionContext
    ) -> dict[str, Any]:
        """Shared attributes, minus authoring attributes, with ``tagName`` set."""
        attrs = self.extract_attributes(element, block_name, context)
        html_attrs = attrs.get("htmlAttributes")
        if html_attrs:
            for name in _AUTHORING_ATTRIBUTES:
                html_attrs.pop(name, None)
            if not html_attrs:
                del attrs["htmlAttributes"]
        attrs["tagName"] = ACCORDION_TAG
        return canonical_order(attrs)
