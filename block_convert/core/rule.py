"""Conversion rule interface and shared attribute helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

from bs4.element import Tag

from block_convert.config import DefaultAttributes
from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import (
    ContentType,
    analyze_element_content,
    build_attributes_string,
    escape_html,
    get_attributes,
    is_text,
    outer_html,
    parse_classes,
    text_content,
)
from block_convert.core.ids import base36_timestamp, generate_unique_id, timestamp_millis
from block_convert.exceptions import RuleError

# Trimmed text longer than this inside a container becomes its own text block.
ORPHANED_TEXT_THRESHOLD = 20

TAG_NAME_BLOCKS = ("generateblocks/element", "generateblocks/text", "generateblocks/media")

# Base classes added to the rendered tag even though the block carries no className.
_IMPLICIT_BASE_CLASSES = {
    "generateblocks-pro/site-header": "gb-site-header",
    "generateblocks-pro/navigation": "gb-navigation",
    "generateblocks-pro/menu-toggle": "gb-menu-toggle",
}

# Blocks whose rendered tag also carries "{base class}-{uniqueId}".
_UNIQUE_CLASS_BLOCKS = ("generateblocks-pro/navigation", "generateblocks-pro/menu-container")


class ChildDispatcher(Protocol):
    """Capability handed to rules for converting their child elements."""

    def convert_element(self, element: Tag, context: ConversionContext) -> Block:
        """Convert one element through the rule registry."""
        ...


class Rule(Protocol):
    """Interface every conversion rule implements."""

    name: str
    priority: int

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        """Whether this rule converts the element."""
        ...

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        """Convert the element and its subtree."""
        ...


def render_html(content: list[str | None], children: list[Block]) -> str:
    """Render block content with each placeholder replaced by its child's HTML."""
    parts: list[str] = []
    remaining = iter(children)
    for part in content:
        if part is None:
            child = next(remaining, None)
            if child is not None:
                parts.append(child.html)
        else:
            parts.append(part)
    return "".join(parts)


_LEADING_KEYS = ("uniqueId", "tagName", "globalClasses")
_TRAILING_KEYS = ("htmlAttributes", "blockId", "metadata", "className")


def canonical_order(attrs: dict[str, Any]) -> dict[str, Any]:
    """Reorder block attributes into the canonical key order.

    Identifier, tag name and classes lead; passthrough attributes, block
    id, metadata and the default class trail. Anything else keeps its
    relative order in between.
    """
    ordered = {key: attrs[key] for key in _LEADING_KEYS if key in attrs}
    for key, value in attrs.items():
        if key not in _LEADING_KEYS and key not in _TRAILING_KEYS:
            ordered[key] = value
    for key in _TRAILING_KEYS:
        if key in attrs:
            ordered[key] = attrs[key]
    return ordered


def html_block(html: str) -> Block:
    """Build a verbatim ``core/html`` block."""
    return Block(block_name="core/html", attrs={}, children=[], content=[html], html=html)


class BaseRule(ABC):
    """Abstract base class for conversion rules.

    Subclasses set ``name``, ``priority`` and ``supported_elements`` and
    implement :meth:`matches` and :meth:`convert`. Child elements are
    converted through the bound dispatcher, never by calling other rules.
    """

    name: str = "base"
    priority: int = 0
    supported_elements: tuple[str, ...] = ()

    def __init__(self, defaults: DefaultAttributes, priority: int | None = None) -> None:
        """Initialize the rule.

        Args:
            defaults: Default-attribute table.
            priority: Overrides the class priority, for companion rule sets.
        """
        self.defaults = defaults
        if priority is not None:
            self.priority = priority
        self.dispatcher: ChildDispatcher | None = None

    def bind(self, dispatcher: ChildDispatcher) -> None:
        """Attach the child-dispatch capability."""
        self.dispatcher = dispatcher

    @abstractmethod
    def matches(self, element: Tag, context: ConversionContext) -> bool:
        """Check whether this rule converts the element.

        Args:
            element: Element to test.
            context: Active conversion options.

        Returns:
            True if :meth:`convert` should be used for the element.
        """
        pass

    @abstractmethod
    def convert(self, element: Tag, context: ConversionContext) -> Block:
        """Convert an element claimed by :meth:`matches`.

        Args:
            element: Element to convert.
            context: Active conversion options.

        Returns:
            The converted block.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"

    # Child conversion

    def convert_child(self, element: Tag, context: ConversionContext) -> Block:
        """Convert a child element through the registry."""
        if self.dispatcher is None:
            raise RuleError(f"{self.name} is not bound to a dispatcher")
        return self.dispatcher.convert_element(element, context)

    def convert_children(
        self, element: Tag, context: ConversionContext, promote_text: bool = True
    ) -> tuple[list[Block], list[str | None]]:
        """Convert an element's child nodes in document order.

        Child elements become blocks with a placeholder in the content list.
        With ``promote_text``, text longer than the orphaned-text threshold
        becomes a text block; other text stays inline.

        Returns:
            Tuple of (children, content) where content holds one ``None``
            per child.
        """
        children: list[Block] = []
        content: list[str | None] = []

        for node in element.children:
            if isinstance(node, Tag):
                children.append(self.convert_child(node, context))
                content.append(None)
            elif is_text(node):
                text = str(node).strip()
                if not text:
                    continue
                if promote_text and len(text) > ORPHANED_TEXT_THRESHOLD:
                    children.append(self.orphaned_text_block(text))
                    content.append(None)
                else:
                    content.append(escape_html(text))

        return children, content

    def orphaned_text_block(self, text: str) -> Block:
        """Wrap loose container text in a span text block."""
        html = f'<span class="gb-text">{escape_html(text)}</span>'
        return Block(
            block_name="generateblocks/text",
            attrs={
                "uniqueId": f"orphaned-{timestamp_millis()}",
                "tagName": "span",
                "content": text,
                "className": "gb-text",
            },
            content=[html],
            html=html,
        )

    # Attribute extraction

    def analyze_content(self, element: Tag) -> ContentType:
        """Classify an element's direct children."""
        return analyze_element_content(element)

    def extract_css_classes(self, element: Tag, context: ConversionContext) -> list[str]:
        """Get the element's classes, or nothing when classes are not preserved."""
        if not context.preserve_classes:
            return []
        return parse_classes(element.get("class"))

    def extract_html_attributes(self, element: Tag, context: ConversionContext) -> dict[str, str]:
        """Get passthrough attributes, excluding class and (usually) style."""
        attrs: dict[str, str] = {}
        for name, value in get_attributes(element).items():
            if name == "class":
                continue
            if name == "style" and not context.preserve_styles:
                continue
            attrs[name] = value
        return attrs

    def extract_text_content(self, element: Tag) -> str:
        """Get the element's trimmed text."""
        return text_content(element).strip()

    def extract_attributes(
        self, element: Tag, block_name: str, context: ConversionContext
    ) -> dict[str, Any]:
        """Build block attributes in the canonical key order.

        Order: uniqueId, tagName, globalClasses, content, htmlAttributes,
        blockId, metadata, className.

        Args:
            element: Source element.
            block_name: Target block kind.
            context: Active conversion options.

        Returns:
            Ordered attribute mapping.
        """
        attrs: dict[str, Any] = {}
        tag_name = element.name.lower()

        if context.generate_unique_ids:
            attrs["uniqueId"] = generate_unique_id()

        if block_name in TAG_NAME_BLOCKS:
            attrs["tagName"] = tag_name

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes

        if block_name == "generateblocks/text" and not context.skip_content_attribute:
            attrs["content"] = self.extract_text_content(element)

        html_attrs = self.extract_html_attributes(element, context)
        if html_attrs:
            attrs["htmlAttributes"] = html_attrs

        if attrs.get("uniqueId"):
            attrs["blockId"] = f"block-{attrs['uniqueId'][:8]}-{base36_timestamp()}"

        kind = "Text" if block_name == "generateblocks/text" else "Element"
        attrs["metadata"] = {"name": f"{tag_name.capitalize()} {kind}"}

        class_name = self.defaults.class_name_for(block_name)
        if class_name:
            attrs["className"] = class_name

        return attrs

    def build_opening_tag(
        self, tag_name: str, attrs: dict[str, Any], block_name: str | None = None
    ) -> str:
        """Render an opening tag from block attributes.

        Class order: base class, user classes, then the per-block unique
        class where the block kind uses one. Duplicates are dropped.
        """
        classes: list[str] = []

        base_class = attrs.get("className") or self.defaults.default_class(block_name)
        if not base_class and block_name in _IMPLICIT_BASE_CLASSES:
            base_class = _IMPLICIT_BASE_CLASSES[block_name]
        if base_class:
            classes.append(base_class)

        classes.extend(attrs.get("globalClasses", []))

        if base_class and attrs.get("uniqueId") and block_name in _UNIQUE_CLASS_BLOCKS:
            classes.append(f"{base_class}-{attrs['uniqueId']}")

        unique_classes = list(dict.fromkeys(cls for cls in classes if cls))
        parts = []
        if unique_classes:
            parts.append(f'class="{" ".join(unique_classes)}"')
        html_attrs = build_attributes_string(attrs.get("htmlAttributes"))
        if html_attrs:
            parts.append(html_attrs)

        return f"<{tag_name}{' ' + ' '.join(parts) if parts else ''}>"

    def html_fallback(self, element: Tag) -> Block:
        """Build a verbatim ``core/html`` block for the element."""
        return html_block(outer_html(element))
