"""Serialization of block trees to comment-delimited block markup."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from block_convert.core.block import Block

MARKER_PREFIX = "wp"

_COMMENT_SPLIT_RE = re.compile(r"(<!--[\s\S]*?-->)")
_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_TAG_RE = re.compile(r"\s+<")
_SPACE_AFTER_TAG_RE = re.compile(r">\s+")
_CLOSING_MARKER_RE = re.compile(r"<!-- /wp:")
_OPENING_MARKER_RE = re.compile(r"<!-- wp:")
_LEADING_NEWLINES_RE = re.compile(r"^\n+")

# Sequences that would end or confuse a marker comment, escaped the way the
# block editor escapes them.
_COMMENT_UNSAFE = (
    ("--", "\\u002d\\u002d"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
)


@dataclass
class SerializedMarkup:
    """Both renderings of a block list."""

    unminified: str
    minified: str


def encode_attrs(attrs: dict) -> str:
    """Encode block attributes for a marker comment.

    Returns an empty string for empty attributes, otherwise the compact
    JSON prefixed with a space. Key order is preserved. Characters that
    could close the comment are written as JSON unicode escapes, so the
    payload still decodes to the same attributes.
    """
    if not attrs:
        return ""
    encoded = json.dumps(attrs, separators=(",", ":"), ensure_ascii=False)
    for unsafe, escaped in _COMMENT_UNSAFE:
        encoded = encoded.replace(unsafe, escaped)
    return " " + encoded


def serialize_block(block: Block, formatted: bool = False) -> str:
    """Serialize one block and its children.

    Args:
        block: Block to serialize.
        formatted: Put nested blocks and the closing marker on their own lines.

    Returns:
        Block markup.
    """
    name = block.block_name
    attr_string = encode_attrs(block.attrs)

    if block.is_self_closing:
        return f"<!-- {MARKER_PREFIX}:{name}{attr_string} /-->"

    separator = "\n" if formatted else ""
    parts: list[str] = []
    remaining = iter(block.children)
    for item in block.content:
        if item is None:
            child = next(remaining, None)
            if child is not None:
                parts.append(separator + serialize_block(child, formatted))
        else:
            parts.append(item)
    content = "".join(parts)

    if formatted:
        return f"<!-- {MARKER_PREFIX}:{name}{attr_string} -->\n{content}\n<!-- /{MARKER_PREFIX}:{name} -->"
    return f"<!-- {MARKER_PREFIX}:{name}{attr_string} -->{content}<!-- /{MARKER_PREFIX}:{name} -->"


def collapse_whitespace(markup: str) -> str:
    """Collapse whitespace runs to one space everywhere except inside comments."""
    segments = _COMMENT_SPLIT_RE.split(markup)
    for i in range(0, len(segments), 2):
        segments[i] = _WHITESPACE_RE.sub(" ", segments[i])
    return "".join(segments).strip()


def strip_tag_whitespace(markup: str) -> str:
    """Remove whitespace around tags, leaving comment bodies untouched."""
    segments = _COMMENT_SPLIT_RE.split(markup)
    last = len(segments) - 1
    for i in range(0, len(segments), 2):
        segment = _SPACE_BEFORE_TAG_RE.sub("<", segments[i])
        segment = _SPACE_AFTER_TAG_RE.sub(">", segment)
        # Comments open with "<" and close with ">".
        if i > 0:
            segment = segment.lstrip()
        if i < last:
            segment = segment.rstrip()
        segments[i] = segment
    return "".join(segments)


def minify_markup(formatted: str) -> str:
    """Minify formatted block markup.

    Whitespace between tags is removed, never inside comments, and every
    opening and closing marker starts its own line.
    """
    minified = strip_tag_whitespace(collapse_whitespace(formatted))
    minified = _CLOSING_MARKER_RE.sub("\n<!-- /wp:", minified)
    minified = _OPENING_MARKER_RE.sub("\n<!-- wp:", minified)
    minified = _LEADING_NEWLINES_RE.sub("", minified)
    return minified.strip()


def serialize_blocks(blocks: list[Block]) -> SerializedMarkup:
    """Serialize top-level blocks in both formatted and minified form."""
    unminified = "\n\n".join(serialize_block(block, formatted=True) for block in blocks)
    return SerializedMarkup(unminified=unminified, minified=minify_markup(unminified))
