"""Icon detection and attribute helpers shared by button-like rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4.element import PageElement, Tag

from block_convert.core.html_utils import get_attributes, is_text, outer_html


@dataclass
class IconAnalysis:
    """SVG icons and text found inside an element."""

    icons: list[str] = field(default_factory=list)
    text: str = ""

    @property
    def has_icons(self) -> bool:
        return bool(self.icons)

    @property
    def is_icon_only(self) -> bool:
        """Whether the element shows icons and no text."""
        return self.has_icons and not self.text.strip()


def analyze_icons(element: Tag) -> IconAnalysis:
    """Collect SVG markup and text, without descending into SVGs."""
    analysis = IconAnalysis()
    _visit(element, analysis)
    return analysis


def _visit(node: PageElement, analysis: IconAnalysis) -> None:
    if isinstance(node, Tag):
        if node.name.lower() == "svg":
            analysis.icons.append(outer_html(node))
            return
        for child in node.children:
            _visit(child, analysis)
    elif is_text(node):
        text = str(node).strip()
        if text:
            analysis.text += text + " "


def extract_button_html_attributes(element: Tag) -> dict[str, str]:
    """Get link, button, data and aria attributes for a button-like element."""
    tag_name = element.name.lower()
    source = get_attributes(element)
    attrs: dict[str, str] = {}

    if tag_name == "a":
        for name in ("href", "target", "rel"):
            if name in source:
                attrs[name] = source[name]

    if tag_name == "button":
        if "type" in source:
            attrs["type"] = source["type"]
        if "disabled" in source:
            attrs["disabled"] = "disabled"

    for name, value in source.items():
        if name.startswith("data-") and name != "data-shape":
            attrs[name] = value

    for name, value in source.items():
        if name.startswith("aria-"):
            attrs[name] = value

    return attrs
