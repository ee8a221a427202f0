"""Container elements to ``generateblocks/element``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import ContentType
from block_convert.core.rule import BaseRule, canonical_order, render_html

CONTAINER_ELEMENTS = (
    "div", "section", "article", "aside", "header", "footer", "nav", "main",
    "figure", "ul", "ol", "li", "dl", "dt", "dd", "form", "fieldset",
)

# Embedded-content tags the element block cannot represent; rendered as div.
DIV_SUBSTITUTED = ("picture", "video", "audio", "canvas", "svg", "object", "embed")


class ElementRule(BaseRule):
    """Converts containers, and any element holding child elements."""

    name = "generateblocks.element"
    priority = 25
    supported_elements = CONTAINER_ELEMENTS

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if "-" in tag_name:
            return False
        if tag_name in CONTAINER_ELEMENTS:
            return True
        if context.semantic_mapping:
            return self.analyze_content(element) in (
                ContentType.CHILD_ELEMENTS,
                ContentType.MIXED_CONTENT,
                ContentType.EMPTY,
            )
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        block_name = "generateblocks/element"
        tag_name = element.name.lower()
        attrs = self.extract_attributes(element, block_name, context)

        rendered_tag = "div" if tag_name in DIV_SUBSTITUTED else tag_name
        if rendered_tag != tag_name:
            attrs["tagName"] = rendered_tag
            attrs.setdefault("htmlAttributes", {})["data-original-tag"] = tag_name
            attrs = canonical_order(attrs)

        children, content = self.convert_children(element, context)
        opening_tag = self.build_opening_tag(rendered_tag, attrs, block_name)
        closing_tag = f"</{rendered_tag}>"
        content = [opening_tag, *content, closing_tag]

        return Block(
            block_name=block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )
