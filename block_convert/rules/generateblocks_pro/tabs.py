"""Tab custom elements to ``generateblocks-pro`` tab blocks.

``<tabs>`` holds a ``<tabs-menu>`` of ``<tab-menu-item>`` buttons and a
``<tab-items>`` list of ``<tab-item>`` panels. The first button and the
first panel start open.
"""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import child_elements
from block_convert.core.rule import canonical_order, render_html
from block_convert.rules.generateblocks.text import span_text_block
from block_convert.rules.generateblocks_pro.base import ProRule

TAB_ELEMENTS = {
    "tabs": "generateblocks-pro/tabs",
    "tabs-menu": "generateblocks-pro/tabs-menu",
    "tab-menu-item": "generateblocks-pro/tab-menu-item",
    "tab-items": "generateblocks-pro/tab-items",
    "tab-item": "generateblocks-pro/tab-item",
}

TAB_TAG = "div"

# Accessibility attributes added per element.
_ROLES = {
    "tabs-menu": "tablist",
    "tab-menu-item": "tab",
    "tab-items": "tabpanel",
}


def is_first_of_kind(element: Tag) -> bool:
    """Whether no earlier sibling element has the same tag."""
    parent = element.parent
    if parent is None:
        return True
    for sibling in child_elements(parent):
        if sibling.name.lower() == element.name.lower():
            return sibling is element
    return True


class TabsRule(ProRule):
    """Converts tab custom elements."""

    name = "generateblocks-pro.tabs"
    priority = 75
    supported_elements = tuple(TAB_ELEMENTS)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in TAB_ELEMENTS

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag = element.name.lower()
        block_name = TAB_ELEMENTS[tag]
        attrs = self.pro_attributes(element, block_name, TAB_TAG, context)

        extra: dict[str, str] = {}
        if tag == "tabs":
            extra["data-opened-tab"] = "1"
        if tag in _ROLES:
            extra["role"] = _ROLES[tag]
        if tag in ("tab-menu-item", "tab-item") and attrs.get("uniqueId"):
            prefix = "gb-tab-menu-item" if tag == "tab-menu-item" else "gb-tab-item"
            extra["id"] = f"{prefix}-{attrs['uniqueId']}"
        if extra:
            attrs["htmlAttributes"] = {**attrs.get("htmlAttributes", {}), **extra}

        if tag in ("tab-menu-item", "tab-item") and is_first_of_kind(element):
            attrs["tabItemOpen"] = True
        attrs = canonical_order(attrs)

        children, content = self.tab_children(element, tag, context)
        opening_tag = self.build_opening_tag(TAB_TAG, attrs, block_name)
        content = [opening_tag, *content, f"</{TAB_TAG}>"]
        return Block(
            block_name=block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def tab_children(
        self, element: Tag, tag: str, context: ConversionContext
    ) -> tuple[list[Block], list[Any]]:
        """A menu item's label becomes a span text block; other children convert normally."""
        if tag == "tab-menu-item":
            label = self.extract_text_content(element)
            if label:
                return [span_text_block(label, context)], [None]
        return self.convert_children(element, context, promote_text=False)
