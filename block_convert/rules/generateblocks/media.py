"""Images to ``generateblocks/media``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html
from block_convert.core.rule import BaseRule

IMAGE_ATTRIBUTES = ("src", "alt", "width", "height", "loading", "srcset", "sizes")


class MediaRule(BaseRule):
    """Converts ``img`` elements."""

    name = "generateblocks.media"
    priority = 100
    supported_elements = ("img",)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() == "img"

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.extract_attributes(element, "generateblocks/media", context)

        # Any image attribute also lands in the generic passthrough, so the
        # key already exists and keeps its position.
        image_attrs = {name: element[name] for name in IMAGE_ATTRIBUTES if element.has_attr(name)}
        if image_attrs:
            attrs["htmlAttributes"] = image_attrs

        parts = []
        if attrs.get("globalClasses"):
            parts.append(f'class="{" ".join(attrs["globalClasses"])}"')
        for key, value in (attrs.get("htmlAttributes") or {}).items():
            parts.append(f'{key}="{escape_html(value)}"')
        html = f"<img {' '.join(parts)}/>"

        return Block(
            block_name="generateblocks/media",
            attrs=attrs,
            content=[html],
            html=html,
        )
