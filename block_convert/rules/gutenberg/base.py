"""Attribute and tag helpers shared by the core block rules."""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import build_attributes_string
from block_convert.core.ids import generate_unique_id
from block_convert.core.rule import BaseRule


class GutenbergRule(BaseRule):
    """Base for rules emitting ``core/*`` blocks.

    Core blocks carry user classes as a single ``className`` string and
    render a fixed ``wp-block-*`` wrapper class ahead of them.
    """

    wrapper_class: str | None = None
    keep_html_attributes: bool = True

    def gutenberg_attributes(self, element: Tag, context: ConversionContext) -> dict[str, Any]:
        """``className`` and, where the block keeps them, ``htmlAttributes``."""
        attrs: dict[str, Any] = {}
        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["className"] = " ".join(classes)
        if self.keep_html_attributes:
            html_attrs = self.extract_html_attributes(element, context)
            if html_attrs:
                attrs["htmlAttributes"] = html_attrs
        return attrs

    def block_id(self) -> str:
        return generate_unique_id()

    def build_gutenberg_tag(self, tag_name: str, attrs: dict[str, Any]) -> str:
        """Opening tag with the wrapper class, user classes and html attributes."""
        classes = [self.wrapper_class] if self.wrapper_class else []
        if attrs.get("className"):
            classes.append(attrs["className"])
        class_attr = f' class="{" ".join(classes)}"' if classes else ""
        html_attrs = build_attributes_string(attrs.get("htmlAttributes"))
        if html_attrs:
            html_attrs = " " + html_attrs
        return f"<{tag_name}{class_attr}{html_attrs}>"
