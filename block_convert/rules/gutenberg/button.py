"""Buttons and button-like links to ``core/buttons`` holding one ``core/button``."""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html, parse_classes
from block_convert.core.rule import render_html
from block_convert.rules.gutenberg.base import GutenbergRule

BUTTON_CLASS_KEYWORDS = ("btn", "button", "cta", "call-to-action")


class ButtonRule(GutenbergRule):
    """Converts ``<button>`` and links whose classes mark them as buttons."""

    name = "gutenberg.button"
    priority = 60
    supported_elements = ("button", "a")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if tag_name == "button":
            return True
        if tag_name == "a":
            classes = [cls.lower() for cls in parse_classes(element.get("class"))]
            return any(keyword in cls for keyword in BUTTON_CLASS_KEYWORDS for cls in classes)
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        buttons_attrs = {"blockId": self.block_id()}
        button_attrs: dict[str, Any] = {"blockId": self.block_id()}

        text = self.extract_text_content(element)
        if text:
            button_attrs["text"] = text

        if element.name.lower() == "a":
            if element.get("href"):
                button_attrs["url"] = element["href"]
            if element.get("target") == "_blank":
                button_attrs["linkTarget"] = "_blank"
            if element.get("rel"):
                button_attrs["rel"] = element["rel"]

        button_html = (
            '<div class="wp-block-button">'
            f'<a class="wp-block-button__link wp-element-button">{escape_html(text)}</a></div>'
        )
        button = Block(
            block_name="core/button",
            attrs=button_attrs,
            content=[button_html],
            html=button_html,
        )

        content: list[str | None] = ['<div class="wp-block-buttons">', None, "</div>"]
        return Block(
            block_name="core/buttons",
            attrs=buttons_attrs,
            children=[button],
            content=content,
            html=render_html(content, [button]),
        )
