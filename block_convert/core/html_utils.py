"""HTML parsing and inspection helpers.

BeautifulSoup provides the element tree; everything else in the engine
reads elements only through the helpers in this module.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

logger = logging.getLogger(__name__)

DOCUMENT_SHELL = '<!DOCTYPE html><html><head><meta charset="UTF-8"></head><body>{}</body></html>'

# Non-whitespace text shorter than this next to child elements is formatting noise.
MIXED_CONTENT_THRESHOLD = 5

_CUSTOM_ELEMENT_RE = re.compile(r"^[a-z]+-[a-z-]+$")
_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"""\s*on\w+\s*=\s*["'][^"']*["']""", re.IGNORECASE)
_JAVASCRIPT_URL_RE = re.compile(r"\s*javascript\s*:", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"\s*[-+]?\d+")

_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})


class ContentType(str, Enum):
    """What an element's direct children consist of."""

    EMPTY = "empty"
    TEXT_ONLY = "text_only"
    CHILD_ELEMENTS = "child_elements"
    MIXED_CONTENT = "mixed_content"


@dataclass
class ValidationReport:
    """Result of a structural HTML check."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def parse_html(html: str) -> Tag | None:
    """Parse an HTML fragment.

    Args:
        html: Fragment to parse.

    Returns:
        The ``body`` element holding the parsed fragment, or None if the
        parser rejected the markup.
    """
    try:
        soup = BeautifulSoup(DOCUMENT_SHELL.format(html), "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        logger.error("HTML parsing failed: %s", e)
        return None
    return soup.body


def is_text(node: PageElement) -> bool:
    """Whether a node is a plain text node (not a comment, doctype or CDATA)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def child_elements(element: Tag) -> list[Tag]:
    """Get the direct element children of an element."""
    return [child for child in element.children if isinstance(child, Tag)]


def get_attributes(element: Tag) -> dict[str, str]:
    """Get an element's attributes as an ordered name -> string map."""
    attrs: dict[str, str] = {}
    for name, value in element.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attrs[name] = "" if value is None else str(value)
    return attrs


def text_content(element: Tag) -> str:
    """Get the concatenated text of an element and its descendants."""
    return element.get_text()


def inner_html(element: Tag) -> str:
    """Serialize an element's children."""
    return element.decode_contents()


def outer_html(element: Tag) -> str:
    """Serialize an element including its own tags."""
    return str(element)


def analyze_element_content(element: Tag) -> ContentType:
    """Classify the direct children of an element.

    Args:
        element: Element to inspect.

    Returns:
        The content type. Elements mixing child elements with fewer than
        five characters of text are treated as ``CHILD_ELEMENTS``.
    """
    has_text = False
    has_elements = False
    text = ""

    for child in element.children:
        if is_text(child):
            stripped = str(child).strip()
            if stripped:
                has_text = True
                text += stripped
        elif isinstance(child, Tag):
            has_elements = True

    if not has_text and not has_elements:
        return ContentType.EMPTY
    if has_text and not has_elements:
        return ContentType.TEXT_ONLY
    if has_elements and not has_text:
        return ContentType.CHILD_ELEMENTS
    if len(text) < MIXED_CONTENT_THRESHOLD:
        return ContentType.CHILD_ELEMENTS
    return ContentType.MIXED_CONTENT


def is_custom_element(tag_name: str | None) -> bool:
    """Whether a tag name is a hyphenated custom element name."""
    if not tag_name:
        return False
    return bool(_CUSTOM_ELEMENT_RE.match(tag_name.lower()))


def parse_classes(class_string: str | None) -> list[str]:
    """Split a class attribute into class names."""
    if not class_string:
        return []
    return [cls.strip() for cls in class_string.split(" ") if cls.strip()]


def parse_int(value: str) -> int | None:
    """Leading integer of a string, or None when there is none."""
    match = _LEADING_INT_RE.match(value)
    return int(match.group(0)) if match else None


def escape_html(text: Any) -> str:
    """Escape the five HTML special characters."""
    if not text or not isinstance(text, str):
        return ""
    return text.translate(_HTML_ESCAPES)


def build_attributes_string(attributes: dict[str, Any] | None) -> str:
    """Render a mapping as escaped ``key="value"`` pairs."""
    if not attributes:
        return ""
    return " ".join(f'{key}="{escape_html(str(value))}"' for key, value in attributes.items())


def sanitize_html(html: Any) -> str:
    """Strip scripts, styles and event handlers, then collapse whitespace.

    This is a conversion pre-pass, not a security sanitizer.
    """
    if not html or not isinstance(html, str):
        return ""

    cleaned = _SCRIPT_RE.sub("", html)
    cleaned = _STYLE_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    cleaned = _JAVASCRIPT_URL_RE.sub("", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()


def validate_html_structure(html: Any) -> ValidationReport:
    """Run cheap structural checks on an HTML string.

    Args:
        html: Markup to check.

    Returns:
        Validation report with errors and warnings.
    """
    report = ValidationReport()

    if not html or not isinstance(html, str):
        report.is_valid = False
        report.errors.append("HTML content is required")
        return report

    open_tags = re.findall(r"<[^/][^>]*>", html)
    close_tags = re.findall(r"</[^>]*>", html)
    if len(open_tags) != len(close_tags):
        report.warnings.append("Potentially unclosed HTML tags detected")

    if re.search(r"<script", html, re.IGNORECASE):
        report.warnings.append("Script tags detected - will be removed")

    if re.search(r"on\w+\s*=", html, re.IGNORECASE):
        report.warnings.append("Event handlers detected - will be removed")

    return report
