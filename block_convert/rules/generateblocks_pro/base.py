"""Shared attribute shape for tab and navigation blocks."""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.context import ConversionContext
from block_convert.core.ids import md5_hex, short_id
from block_convert.core.rule import BaseRule

PRO_PREFIX = "generateblocks-pro/"


def pro_block_id(unique_id: str) -> str:
    """Block id in the editor's pro format, derived from the short unique id."""
    u = unique_id
    return f"block-{u[:8]}-{u[:4]}-4{u[4:7]}-{u[:4]}-{md5_hex(u)[:12]}"


def pro_metadata_name(block_name: str) -> str:
    """``generateblocks-pro/tab-menu-item`` -> ``Tab Menu Item Element``."""
    kind = block_name.removeprefix(PRO_PREFIX)
    return " ".join(word.capitalize() for word in kind.split("-")) + " Element"


class ProRule(BaseRule):
    """Base for rules emitting short-id ``generateblocks-pro`` blocks."""

    def pro_attributes(
        self, element: Tag, block_name: str, tag_name: str, context: ConversionContext
    ) -> dict[str, Any]:
        """Build attributes in canonical order.

        Args:
            element: Source element.
            block_name: Target block kind.
            tag_name: Tag the block renders as.
            context: Active conversion options.

        Returns:
            Ordered attribute mapping.
        """
        attrs: dict[str, Any] = {}
        if context.generate_unique_ids:
            attrs["uniqueId"] = short_id()
        attrs["tagName"] = tag_name

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes

        html_attrs = self.extract_html_attributes(element, context)
        if html_attrs:
            attrs["htmlAttributes"] = html_attrs

        if attrs.get("uniqueId"):
            attrs["blockId"] = pro_block_id(attrs["uniqueId"])
        attrs["metadata"] = {"name": pro_metadata_name(block_name)}

        class_name = self.defaults.class_name_for(block_name)
        if class_name:
            attrs["className"] = class_name
        return attrs
