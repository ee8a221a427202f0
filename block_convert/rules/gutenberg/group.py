"""Non-empty divs to ``core/group``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import child_elements, text_content
from block_convert.core.rule import render_html
from block_convert.rules.gutenberg.base import GutenbergRule


class GroupRule(GutenbergRule):
    """Converts divs holding elements or text.

    Top-level groups get a constrained layout.
    """

    name = "gutenberg.group"
    priority = 25
    supported_elements = ("div",)
    wrapper_class = "wp-block-group"

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        if element.name.lower() != "div":
            return False
        return bool(child_elements(element)) or bool(text_content(element).strip())

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        attrs["blockId"] = self.block_id()
        if element.parent is None or element.parent.name == "body":
            attrs["layout"] = {"type": "constrained"}

        children, content = self.convert_children(element, context, promote_text=False)
        content = [self.build_gutenberg_tag("div", attrs), *content, "</div>"]
        return Block(
            block_name="core/group",
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )
