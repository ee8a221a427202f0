"""Images to ``core/image``."""

from __future__ import annotations

import random

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html, parse_int
from block_convert.rules.gutenberg.base import GutenbergRule


class ImageRule(GutenbergRule):
    """Converts ``<img>`` into a figure-wrapped image block."""

    name = "gutenberg.image"
    priority = 80
    supported_elements = ("img",)
    keep_html_attributes = False

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() == "img"

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        if element.get("src"):
            attrs["url"] = element["src"]
        if element.get("alt"):
            attrs["alt"] = element["alt"]
        if element.get("width"):
            attrs["width"] = parse_int(element["width"])
        if element.get("height"):
            attrs["height"] = parse_int(element["height"])
        # Placeholder attachment id; the host assigns real ids on import.
        attrs["id"] = random.randrange(1_000_000)
        attrs["blockId"] = self.block_id()

        html = self.build_image_html(attrs)
        return Block(block_name="core/image", attrs=attrs, content=[html], html=html)

    def build_image_html(self, attrs: dict) -> str:
        figure_classes = ["wp-block-image"]
        if attrs.get("className"):
            figure_classes.append(attrs["className"])

        img_attrs = ""
        if attrs.get("url"):
            img_attrs += f' src="{escape_html(attrs["url"])}"'
        if attrs.get("alt"):
            img_attrs += f' alt="{escape_html(attrs["alt"])}"'
        img_attrs += f' class="wp-image-{attrs["id"]}"'

        return f'<figure class="{" ".join(figure_classes)}"><img{img_attrs}/></figure>'
