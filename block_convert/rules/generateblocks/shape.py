"""SVG shapes and icon-only buttons to ``generateblocks/shape``."""

from __future__ import annotations

import copy
from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html, get_attributes, outer_html
from block_convert.core.ids import short_id
from block_convert.core.rule import BaseRule, canonical_order, render_html
from block_convert.rules.generateblocks.icons import analyze_icons, extract_button_html_attributes

# html.parser lowercases attribute names, so viewBox arrives as viewbox.
SVG_ATTRIBUTES = ("xmlns", "viewBox", "viewbox", "fill", "stroke", "width", "height")

# Absolute-positioned divider styling used by the editor for icon buttons.
DIVIDER_STYLES = {
    "position": "absolute",
    "bottom": "0",
    "left": "0",
    "right": "0",
    "overflowX": "hidden",
    "overflowY": "hidden",
    "pointerEvents": "none",
    "color": "#000000",
    "svg": {"fill": "currentColor", "width": "100%"},
}


def _px(value: str) -> str:
    return value if "px" in value else f"{value}px"


class ShapeRule(BaseRule):
    """Converts SVGs, shape-marked elements and icon-only buttons."""

    name = "generateblocks.shape"
    priority = 80
    supported_elements = ("svg", "button", "a")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if tag_name == "svg":
            return True
        if "shape" in (element.get("class") or ""):
            return True
        if element.has_attr("data-shape"):
            return True
        if tag_name in ("button", "a"):
            return analyze_icons(element).is_icon_only
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag_name = element.name.lower()
        if tag_name in ("button", "a") and analyze_icons(element).is_icon_only:
            return self.convert_icon_button(element, context)

        unique_id = short_id()
        attrs: dict[str, Any] = {"uniqueId": unique_id}
        attrs["styles"] = self.extract_shape_styles(element)
        attrs["css"] = self.build_css(unique_id, attrs["styles"])
        attrs["blockId"] = f"block-ac{unique_id[:6]}-{unique_id[:4]}-4917-bf34-be8191ca72dc"

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes

        span_attrs = self.extract_span_attributes(element, context)
        if span_attrs:
            attrs["htmlAttributes"] = span_attrs

        rendered = {"class": " ".join(["gb-shape", f"gb-shape-{unique_id}", *classes])}
        rendered.update({k: v for k, v in span_attrs.items() if k not in SVG_ATTRIBUTES})
        attr_string = "".join(f' {key}="{escape_html(value)}"' for key, value in rendered.items())
        html = f"<span{attr_string}>{self.extract_svg(element)}</span>"

        return Block(
            block_name="generateblocks/shape",
            attrs=canonical_order(attrs),
            content=[html],
            html=html,
        )

    def convert_icon_button(self, element: Tag, context: ConversionContext) -> Block:
        """Wrap an icon-only button or link in an element block holding the shape."""
        tag_name = element.name.lower()
        unique_id = short_id()

        attrs: dict[str, Any] = {
            "uniqueId": unique_id,
            "tagName": tag_name,
            "styles": {},
            "blockId": f"block-{unique_id}-mc8d2agk",
            "metadata": {"name": "Button Element"},
            "className": "gb-element",
        }
        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes
        html_attrs = extract_button_html_attributes(element)
        if html_attrs:
            attrs["htmlAttributes"] = html_attrs

        shape = self.divider_shape(analyze_icons(element).icons[0])

        attr_string = f' class="{" ".join([*classes, "gb-element"])}"'
        attr_string += "".join(f' {key}="{escape_html(value)}"' for key, value in html_attrs.items())
        content: list[str | None] = [f"<{tag_name}{attr_string}>", None, f"</{tag_name}>"]

        return Block(
            block_name="generateblocks/element",
            attrs=canonical_order(attrs),
            children=[shape],
            content=content,
            html=render_html(content, [shape]),
        )

    def divider_shape(self, svg: str) -> Block:
        """Build the shape block nested in an icon-only button."""
        shape_id = short_id()
        attrs = {
            "uniqueId": shape_id,
            "styles": copy.deepcopy(DIVIDER_STYLES),
            "css": (
                f".gb-shape-{shape_id}{{bottom:0;color:#000000;left:0;overflow-x:hidden;"
                f"overflow-y:hidden;pointer-events:none;position:absolute;right:0}}"
                f".gb-shape-{shape_id} svg{{fill:currentColor;width:100%}}"
            ),
            "blockId": f"block-88{shape_id}-9f74-468d-9f12-9fb1d01c1dc4",
            "className": "gb-shape--divider",
        }
        html = f'<span class="gb-shape gb-shape-{shape_id} gb-shape--divider">{svg}</span>'
        return Block(
            block_name="generateblocks/shape",
            attrs=canonical_order(attrs),
            content=[html],
            html=html,
        )

    def extract_svg(self, element: Tag) -> str:
        """Get the element's own SVG markup or its first descendant SVG."""
        if element.name.lower() == "svg":
            return outer_html(element)
        svg = element.find("svg")
        return outer_html(svg) if svg is not None else ""

    def extract_span_attributes(self, element: Tag, context: ConversionContext) -> dict[str, str]:
        """Attributes carried over to the wrapping span."""
        source = get_attributes(element)
        attrs: dict[str, str] = {}

        if element.name.lower() == "svg":
            if "id" in source:
                attrs["id"] = source["id"]
            if "style" in source and context.preserve_styles:
                attrs["style"] = source["style"]
            return attrs

        for name, value in source.items():
            if name in ("class", "data-shape") or name in SVG_ATTRIBUTES:
                continue
            if name == "style" and not context.preserve_styles:
                continue
            attrs[name] = value
        return attrs

    def extract_shape_styles(self, element: Tag) -> dict[str, Any]:
        """Display and SVG sizing styles, with 30px/currentColor defaults."""
        return {
            "display": "inline-flex",
            "svg": {
                "width": _px(element["width"]) if element.has_attr("width") else "30px",
                "height": _px(element["height"]) if element.has_attr("height") else "30px",
                "fill": element["fill"] if element.has_attr("fill") else "currentColor",
            },
        }

    def build_css(self, unique_id: str, styles: dict[str, Any]) -> str:
        """Render the shape's scoped CSS."""
        css = f".gb-shape-{unique_id}{{"
        if styles.get("display"):
            css += f"display:{styles['display']};"
        css += "}"
        svg_styles = styles.get("svg")
        if isinstance(svg_styles, dict):
            css += f".gb-shape-{unique_id} svg{{"
            css += "".join(f"{prop}:{value};" for prop, value in svg_styles.items())
            css += "}"
        return css
