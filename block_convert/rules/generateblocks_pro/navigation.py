"""Site header and menu custom elements to ``generateblocks-pro`` navigation blocks."""

from __future__ import annotations

from dataclasses import dataclass

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.rule import canonical_order, render_html
from block_convert.rules.generateblocks_pro.base import ProRule


@dataclass(frozen=True)
class NavigationElement:
    """How one navigation custom element maps to a block."""

    block_name: str
    tag_name: str


NAVIGATION_ELEMENTS = {
    "site-header": NavigationElement("generateblocks-pro/site-header", "header"),
    "navigation": NavigationElement("generateblocks-pro/navigation", "nav"),
    "menu-toggle": NavigationElement("generateblocks-pro/menu-toggle", "button"),
    "menu-container": NavigationElement("generateblocks-pro/menu-container", "div"),
    "classic-menu": NavigationElement("generateblocks-pro/classic-menu", "ul"),
    "classic-menu-item": NavigationElement("generateblocks-pro/classic-menu-item", "li"),
    "classic-sub-menu": NavigationElement("generateblocks-pro/classic-sub-menu", "ul"),
}

# Classic menus are rendered server-side from the site's menu, so their
# blocks carry no markup.
CLASSIC_MENU_CLASSES = {
    "classic-menu": "gb-menu",
    "classic-menu-item": "gb-menu-item",
    "classic-sub-menu": "gb-sub-menu",
}

MENU_TOGGLE_ICONS = (
    '<span class="gb-menu-open-icon"><svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">'
    '<rect width="256" height="256" fill="none"></rect>'
    '<line x1="40" y1="128" x2="216" y2="128" fill="none" stroke="currentColor" '
    'stroke-linecap="round" stroke-linejoin="round" stroke-width="12"></line>'
    '<line x1="40" y1="64" x2="216" y2="64" fill="none" stroke="currentColor" '
    'stroke-linecap="round" stroke-linejoin="round" stroke-width="12"></line>'
    '<line x1="40" y1="192" x2="216" y2="192" fill="none" stroke="currentColor" '
    'stroke-linecap="round" stroke-linejoin="round" stroke-width="12"></line></svg></span>'
    '<span class="gb-menu-close-icon"><svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 256">'
    '<rect width="256" height="256" fill="none"></rect>'
    '<line x1="200" y1="56" x2="56" y2="200" stroke="currentColor" '
    'stroke-linecap="round" stroke-linejoin="round" stroke-width="16"></line>'
    '<line x1="200" y1="200" x2="56" y2="56" stroke="currentColor" '
    'stroke-linecap="round" stroke-linejoin="round" stroke-width="16"></line></svg></span>'
)


class NavigationRule(ProRule):
    """Converts site header, navigation and menu custom elements.

    Text blocks nested inside a navigation subtree omit their ``content``
    attribute.
    """

    name = "generateblocks-pro.navigation"
    priority = 75
    supported_elements = tuple(NAVIGATION_ELEMENTS)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in NAVIGATION_ELEMENTS

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag = element.name.lower()
        mapping = NAVIGATION_ELEMENTS[tag]
        attrs = self.pro_attributes(element, mapping.block_name, mapping.tag_name, context)

        if tag in CLASSIC_MENU_CLASSES:
            attrs["className"] = CLASSIC_MENU_CLASSES[tag]
            return Block(block_name=mapping.block_name, attrs=attrs)

        if tag == "site-header":
            # Rendered with its base class, but the attribute stays empty.
            attrs["className"] = ""
        elif tag == "menu-container" and attrs.get("uniqueId"):
            base = f"gb-menu-container-{attrs['uniqueId']}"
            double = f"{base}-{attrs['uniqueId']}"
            attrs["className"] = f"{base} {double} {base} {double}"

        opening_tag = self.build_opening_tag(mapping.tag_name, attrs, mapping.block_name)
        closing_tag = f"</{mapping.tag_name}>"

        if tag == "menu-toggle":
            attrs = canonical_order({**attrs, "iconOnly": True})
            html = opening_tag + MENU_TOGGLE_ICONS + closing_tag
            return Block(block_name=mapping.block_name, attrs=attrs, content=[html], html=html)

        nested = context.derive(skip_content_attribute=True)
        children, content = self.convert_children(element, nested, promote_text=False)
        content = [opening_tag, *content, closing_tag]
        return Block(
            block_name=mapping.block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def extract_html_attributes(self, element: Tag, context: ConversionContext) -> dict[str, str]:
        """Passthrough attributes with the mobile menu settings renamed."""
        attrs: dict[str, str] = {}
        for name, value in super().extract_html_attributes(element, context).items():
            if name == "data-mobile-breakpoint":
                attrs["data-gb-mobile-breakpoint"] = f"{value}px"
            elif name == "data-menu-type":
                attrs["data-gb-mobile-menu-type"] = "full-overlay" if value == "overlay" else value
            else:
                attrs[name] = value
        return attrs
