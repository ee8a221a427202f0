"""Any element to ``greenshift-blocks/element``.

Greenshift uses one universal block for every element: the tag lives in
``tag`` (omitted for ``div``), text-only elements carry their markup in
``textContent``, and unknown attributes travel in ``dynamicAttributes``.
"""

from __future__ import annotations

import re
from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import (
    ContentType,
    child_elements,
    escape_html,
    inner_html,
    is_text,
    parse_classes,
    parse_int,
    text_content,
)
from block_convert.core.ids import generate_unique_id
from block_convert.core.rule import BaseRule, render_html

# Rendered as self-closing tags.
SELF_CLOSING_TAGS = ("img", "input", "br", "hr", "meta", "link")

# Never skipped as empty children.
VOID_TAGS = (
    "img", "input", "br", "hr", "meta", "link", "area", "base", "col",
    "embed", "source", "track", "wbr",
)

# Attributes with a dedicated block attribute or no place on the rendered tag.
EXCLUDED_ATTRIBUTES = frozenset({
    "id", "class", "src", "alt", "href", "target", "rel", "type", "name",
    "value", "placeholder", "width", "height", "style", "title", "role",
    "tabindex", "disabled", "readonly", "required", "checked", "selected",
})

BUTTON_KEYWORDS = ("btn", "button", "cta", "action")
DEFAULT_IMAGE_SIZE = 1240

_PATH_OPEN_CLOSE_RE = re.compile(r"<path([^>]*?)></path>")
_PATH_OPEN_RE = re.compile(r"<path([^>]*?)(?<!/)>")
_FIRST_PATH_RE = re.compile(r"<path[^>]*/?>")
_VIEWBOX_RE = re.compile(r'viewBox="([^"]*)"')


def media_id(src: str) -> int:
    """Stable pseudo attachment id in 100-1099 derived from an image URL."""
    value = 0
    for char in src:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 2**31:
        value -= 2**32
    return abs(value) % 1000 + 100


def button_style(classes: str) -> str:
    if "btn-primary" in classes or "primary" in classes:
        return "primary"
    if "btn-secondary" in classes or "secondary" in classes:
        return "secondary"
    if "btn-outline" in classes or "outline" in classes:
        return "outline"
    return "default"


class GreenshiftElementRule(BaseRule):
    """Converts every element to a Greenshift element block."""

    name = "greenshift.element"
    priority = 110
    supported_elements = ("*",)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return True

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.greenshift_attributes(element, context)
        tag_name = attrs.get("tag", "div")
        text = self.extract_text_content(element)

        if tag_name in SELF_CLOSING_TAGS:
            html = self.build_tag(tag_name, attrs, self_closing=True)
            return Block(block_name="greenshift-blocks/element", attrs=attrs, content=[html], html=html)

        icon_html = self.render_icon(attrs) if tag_name == "svg" else None
        if icon_html:
            return Block(
                block_name="greenshift-blocks/element", attrs=attrs, content=[icon_html], html=icon_html
            )

        opening_tag = self.build_tag(tag_name, attrs)
        closing_tag = f"</{tag_name}>"

        if self.analyze_content(element) == ContentType.TEXT_ONLY and text:
            attrs["type"] = "text"
            attrs["innerText"] = text
            content: list[str | None] = [opening_tag, attrs["textContent"], closing_tag]
            return Block(
                block_name="greenshift-blocks/element",
                attrs=attrs,
                content=content,
                html="".join(content),
            )

        children, parts = self.convert_greenshift_children(element, context)
        attrs["type"] = "inner" if children else "no"
        content = [opening_tag, *parts, closing_tag]
        return Block(
            block_name="greenshift-blocks/element",
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def convert_greenshift_children(
        self, element: Tag, context: ConversionContext
    ) -> tuple[list[Block], list[str | None]]:
        """Convert child nodes, skipping empty non-void elements."""
        children: list[Block] = []
        content: list[str | None] = []
        for node in element.children:
            if isinstance(node, Tag):
                empty = not text_content(node).strip() and not child_elements(node)
                if empty and node.name.lower() not in VOID_TAGS:
                    continue
                children.append(self.convert_child(node, context))
                content.append(None)
            elif is_text(node) and str(node).strip():
                content.append(escape_html(str(node).strip()))
        return children, content

    def greenshift_attributes(self, element: Tag, context: ConversionContext) -> dict[str, Any]:
        """Build attributes in Greenshift's key order."""
        unique_id = generate_unique_id()
        attrs: dict[str, Any] = {"id": f"gsbp-{unique_id[:7]}"}
        attrs["localId"] = attrs["id"]
        attrs["blockId"] = f"block-{unique_id}"

        tag_name = element.name.lower()
        if tag_name != "div":
            attrs["tag"] = tag_name

        content_type = self.analyze_content(element)
        text = self.extract_text_content(element)
        if content_type == ContentType.TEXT_ONLY and text:
            attrs["textContent"] = inner_html(element).strip()
        elif child_elements(element):
            attrs["type"] = "inner"
        elif not text:
            attrs["type"] = "no"

        dynamic: list[dict[str, str]] = []
        for name, value in self.extract_html_attributes(element, context).items():
            if name == "id":
                attrs["id"] = f"gsbp-{value}"
                attrs["localId"] = attrs["id"]
            elif name in ("href", "src", "alt", "target"):
                attrs[name] = value
            elif name.startswith(("data-", "aria-")):
                attrs[name] = value
            elif name not in EXCLUDED_ATTRIBUTES:
                dynamic.append({"name": name, "value": value})
        if dynamic:
            attrs["dynamicAttributes"] = dynamic

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["className"] = " ".join(classes)

        attrs.update(self.special_attributes(element))
        return attrs

    def special_attributes(self, element: Tag) -> dict[str, Any]:
        """Button, image, SVG icon and form-control attributes."""
        attrs: dict[str, Any] = {}
        tag_name = element.name.lower()
        classes = element.get("class") or ""

        if tag_name == "button" or (
            tag_name == "a" and any(keyword in classes.lower() for keyword in BUTTON_KEYWORDS)
        ):
            attrs["isButton"] = True
            attrs["buttonStyle"] = button_style(classes)

        if tag_name == "img":
            src = element.get("src")
            if src:
                attrs["src"] = src
                attrs["mediaid"] = media_id(src)
            if element.get("alt") is not None:
                attrs["alt"] = element["alt"]
            width, height = element.get("width"), element.get("height")
            if width and height:
                attrs["originalWidth"] = parse_int(width)
                attrs["originalHeight"] = parse_int(height)
            else:
                attrs["originalWidth"] = DEFAULT_IMAGE_SIZE
                attrs["originalHeight"] = DEFAULT_IMAGE_SIZE

        if tag_name == "svg":
            svg = self.extract_svg(element)
            if svg:
                attrs["icon"] = {
                    "icon": {"font": "rhicon rhi-custom", "svg": svg, "image": ""},
                    "fill": "currentColor",
                    "fillhover": "currentColor",
                    "type": "svg",
                }

        if tag_name in ("input", "textarea", "select"):
            attrs["isFormElement"] = True
            attrs["formType"] = tag_name

        return attrs

    def extract_svg(self, element: Tag) -> str:
        """Normalized SVG markup with self-closing, namespaced paths."""
        inner = inner_html(element)
        if not inner.strip():
            return ""
        view_box = element.get("viewbox") or element.get("viewBox") or "0 0 24 24"
        xmlns = element.get("xmlns") or "http://www.w3.org/2000/svg"
        inner = _PATH_OPEN_CLOSE_RE.sub(r'<path xmlns="http://www.w3.org/2000/svg"\1/>', inner)
        inner = _PATH_OPEN_RE.sub(r'<path xmlns="http://www.w3.org/2000/svg"\1/>', inner)
        return f'<svg xmlns="{xmlns}" viewBox="{view_box}" fill="currentColor">{inner}</svg>'

    def render_icon(self, attrs: dict[str, Any]) -> str | None:
        """Compact SVG rendering holding only the first path, when there is one."""
        icon = attrs.get("icon")
        if not icon:
            return None
        svg = icon["icon"]["svg"]
        path = _FIRST_PATH_RE.search(svg)
        if path is None:
            return None
        view_box = _VIEWBOX_RE.search(svg)
        view_box_value = view_box.group(1) if view_box else "0 0 24 24"
        classes = f"{attrs.get('className', '')} {attrs.get('id', '')}"
        return f'<svg viewBox="{view_box_value}" class="{classes}">{path.group(0)}</svg>'

    def build_tag(self, tag_name: str, attrs: dict[str, Any], self_closing: bool = False) -> str:
        """Render the element's tag from its block attributes."""
        parts: list[str] = []
        class_names = parse_classes(attrs.get("className"))
        if attrs.get("id"):
            class_names.append(attrs["id"])
        if class_names:
            parts.append(f'class="{" ".join(class_names)}"')

        if tag_name == "a":
            if attrs.get("href"):
                parts.append(f'href="{attrs["href"]}"')
            if attrs.get("target"):
                parts.append(f'target="{attrs["target"]}"')

        if tag_name == "img":
            if attrs.get("src"):
                parts.append(f'src="{attrs["src"]}"')
                parts.append('loading="lazy"')
                if self_closing:
                    if attrs.get("originalWidth"):
                        parts.append(f'width="{attrs["originalWidth"]}"')
                    if attrs.get("originalHeight"):
                        parts.append(f'height="{attrs["originalHeight"]}"')
            if "alt" in attrs and (self_closing or attrs["alt"]):
                parts.append(f'alt="{attrs["alt"]}"')

        for key, value in attrs.items():
            if key.startswith(("data-", "aria-")):
                parts.append(f'{key}="{value}"')
        for dynamic in attrs.get("dynamicAttributes", []):
            parts.append(f'{dynamic["name"]}="{dynamic["value"]}"')

        attribute_string = " " + " ".join(parts) if parts else ""
        return f"<{tag_name}{attribute_string}{'/' if self_closing else ''}>"
