"""Rules producing ``generateblocks/*`` blocks."""

from block_convert.rules.generateblocks.button import ButtonRule
from block_convert.rules.generateblocks.element import ElementRule
from block_convert.rules.generateblocks.media import MediaRule
from block_convert.rules.generateblocks.query import QueryRule
from block_convert.rules.generateblocks.shape import ShapeRule
from block_convert.rules.generateblocks.text import TextRule

__all__ = [
    "ButtonRule",
    "ElementRule",
    "MediaRule",
    "QueryRule",
    "ShapeRule",
    "TextRule",
]
