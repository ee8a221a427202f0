"""Buttons and button-like links to ``generateblocks/text``."""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html
from block_convert.core.ids import short_id
from block_convert.core.rule import BaseRule, canonical_order
from block_convert.rules.generateblocks.icons import (
    IconAnalysis,
    analyze_icons,
    extract_button_html_attributes,
)

BUTTON_CLASS_PATTERNS = ("btn", "button", "cta", "action")


class ButtonRule(BaseRule):
    """Converts buttons with text, optionally with leading SVG icons.

    Icon-only buttons are left to the shape rule.
    """

    name = "generateblocks.button"
    priority = 60
    supported_elements = ("button", "a")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if analyze_icons(element).is_icon_only:
            return False
        if tag_name == "button":
            return True
        if tag_name == "a":
            class_list = (element.get("class") or "").lower()
            if any(pattern in class_list for pattern in BUTTON_CLASS_PATTERNS):
                return True
            return element.get("role") == "button"
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag_name = element.name.lower()
        icons = analyze_icons(element)
        unique_id = short_id()

        attrs: dict[str, Any] = {"uniqueId": unique_id, "tagName": tag_name}
        attrs["styles"] = self.build_styles(icons.has_icons)
        attrs["css"] = self.build_css(unique_id, attrs["styles"])
        attrs["blockId"] = f"block-fc{unique_id}-d668-48e5-933e-28ba2c87cd4d"

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes

        html_attrs = extract_button_html_attributes(element)
        if html_attrs:
            attrs["htmlAttributes"] = html_attrs

        html = self.build_html(tag_name, icons, unique_id, classes, html_attrs)
        return Block(
            block_name="generateblocks/text",
            attrs=canonical_order(attrs),
            content=[html],
            html=html,
        )

    def build_styles(self, has_icons: bool) -> dict[str, Any]:
        """Inline-flex layout styles, only needed when icons are present."""
        if not has_icons:
            return {}
        return {
            "display": "inline-flex",
            "alignItems": "center",
            "columnGap": "0.5em",
            ".gb-shape svg": {"width": "1em", "height": "1em", "fill": "currentColor"},
        }

    def build_css(self, unique_id: str, styles: dict[str, Any]) -> str:
        """Render the block's scoped CSS from its styles."""
        css = ""
        if styles.get("display") or styles.get("alignItems") or styles.get("columnGap"):
            css += f".gb-text-{unique_id}{{"
            if styles.get("alignItems"):
                css += f"align-items:{styles['alignItems']};"
            if styles.get("columnGap"):
                css += f"column-gap:{styles['columnGap']};"
            if styles.get("display"):
                css += f"display:{styles['display']}"
            css += "}"

        svg_styles = styles.get(".gb-shape svg")
        if svg_styles:
            css += f".gb-text-{unique_id} .gb-shape svg{{"
            css += "".join(f"{prop}:{value};" for prop, value in svg_styles.items())
            css += "}"
        return css

    def build_html(
        self,
        tag_name: str,
        icons: IconAnalysis,
        unique_id: str,
        classes: list[str],
        html_attrs: dict[str, str],
    ) -> str:
        """Render the button: icons wrapped in shape spans, then the text."""
        class_list = ["gb-text", *classes, f"gb-text-{unique_id}"]
        attr_string = f' class="{" ".join(class_list)}"'
        attr_string += "".join(f' {key}="{escape_html(value)}"' for key, value in html_attrs.items())

        text = escape_html(icons.text.strip())
        if icons.has_icons:
            inner = "".join(f'<span class="gb-shape">{svg}</span>' for svg in icons.icons) + text
        else:
            inner = text
        return f"<{tag_name}{attr_string}>{inner}</{tag_name}>"
