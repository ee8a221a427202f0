"""Block markup to clean HTML, plus structural analysis of block markup."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from block_convert.core.block import block_family

logger = logging.getLogger(__name__)

INDENT_SIZE = 2

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "param", "source", "track", "wbr",
})

# Attribute payload runs lazily up to the first marker terminator, so a
# broken payload still yields the block name.
_OPENING_MARKER_RE = re.compile(r"<!-- wp:([^\s{}]+)(?:\s+(.*?))?\s*/?-->", re.DOTALL)
_STRIP_OPENING_RE = re.compile(r"<!-- wp:[\s\S]*?-->")
_STRIP_CLOSING_RE = re.compile(r"<!-- /wp:[\s\S]*?-->")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_TAG_SPLIT_RE = re.compile(r"(<[^>]*>)")
_TAG_NAME_RE = re.compile(r"<(\w+)")


@dataclass
class MarkerInfo:
    """An opening block marker found in markup."""

    name: str
    attributes: dict[str, Any]
    full_match: str


@dataclass
class BlockAnalysis:
    """Block counts for a markup string."""

    total_blocks: int = 0
    block_types: dict[str, int] = field(default_factory=dict)
    family_counts: dict[str, int] = field(default_factory=dict)
    elements: list[str] = field(default_factory=list)

    @property
    def greenshift_blocks(self) -> int:
        """Number of greenshift blocks."""
        return self.family_counts.get("greenshift-blocks", 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalBlocks": self.total_blocks,
            "blockTypes": dict(self.block_types),
            "familyCounts": dict(self.family_counts),
            "greenshiftBlocks": self.greenshift_blocks,
            "elements": list(self.elements),
        }


def parse_block_attributes(payload: str | None) -> dict[str, Any]:
    """Parse a marker's attribute payload.

    Malformed payloads are logged and yield an empty mapping.
    """
    if not payload:
        return {}
    try:
        parsed = json.loads(payload)
    except ValueError:
        logger.warning("Failed to parse block attributes: %s", payload)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Block attributes are not an object: %s", payload)
        return {}
    return parsed


def is_void_tag(tag: str) -> bool:
    """Whether a tag token opens a void element."""
    match = _TAG_NAME_RE.match(tag)
    return bool(match) and match.group(1).lower() in VOID_ELEMENTS


def format_html(html: str) -> str:
    """Re-indent HTML one token per line.

    Opening tags indent what follows unless they are void or
    self-closing; closing tags dedent.
    """
    lines: list[str] = []
    indent = 0

    for token in _TAG_SPLIT_RE.split(html):
        if not token.strip():
            continue

        if token.startswith("</"):
            indent -= INDENT_SIZE
            lines.append(" " * max(0, indent) + token)
        elif token.startswith("<") and not token.endswith("/>"):
            lines.append(" " * max(0, indent) + token)
            if not is_void_tag(token):
                indent += INDENT_SIZE
        elif token.startswith("<"):
            lines.append(" " * max(0, indent) + token)
        else:
            lines.append(" " * max(0, indent) + token.strip())

    return "\n".join(lines).strip()


class BlocksToHtmlConverter:
    """Extracts plain HTML from block markup."""

    def strip_to_html(self, markup: str) -> str:
        """Remove every block marker and re-indent the remaining HTML.

        Args:
            markup: Block markup.

        Returns:
            Clean, indented HTML.
        """
        html = _STRIP_OPENING_RE.sub("", markup)
        html = _STRIP_CLOSING_RE.sub("", html)
        html = _BLANK_LINES_RE.sub("\n", html)
        return format_html(html.strip())

    def extract_blocks(self, markup: str) -> list[MarkerInfo]:
        """Find every opening marker, including self-closing ones."""
        return [
            MarkerInfo(
                name=match.group(1),
                attributes=parse_block_attributes(match.group(2)),
                full_match=match.group(0),
            )
            for match in _OPENING_MARKER_RE.finditer(markup)
        ]

    def analyze(self, markup: str) -> BlockAnalysis:
        """Count blocks per name and per dialect family.

        Args:
            markup: Block markup.

        Returns:
            Analysis with counts and the distinct element tags named in
            ``tag``/``tagName`` attributes.
        """
        analysis = BlockAnalysis()
        for marker in self.extract_blocks(markup):
            analysis.total_blocks += 1
            analysis.block_types[marker.name] = analysis.block_types.get(marker.name, 0) + 1
            family = block_family(marker.name)
            analysis.family_counts[family] = analysis.family_counts.get(family, 0) + 1

            tag = marker.attributes.get("tag") or marker.attributes.get("tagName")
            if isinstance(tag, str) and tag not in analysis.elements:
                analysis.elements.append(tag)
        return analysis

    def convert_with_analysis(self, markup: str) -> dict[str, Any]:
        """Extract HTML and analyze the markup in one call."""
        return {
            "html": self.strip_to_html(markup),
            "analysis": self.analyze(markup),
        }
