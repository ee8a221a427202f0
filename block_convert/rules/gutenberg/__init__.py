"""Rules producing native ``core/*`` blocks."""

from block_convert.rules.gutenberg.base import GutenbergRule
from block_convert.rules.gutenberg.button import ButtonRule
from block_convert.rules.gutenberg.code import CodeRule
from block_convert.rules.gutenberg.details import DetailsRule
from block_convert.rules.gutenberg.group import GroupRule
from block_convert.rules.gutenberg.heading import HeadingRule
from block_convert.rules.gutenberg.image import ImageRule
from block_convert.rules.gutenberg.lists import ListRule
from block_convert.rules.gutenberg.paragraph import ParagraphRule
from block_convert.rules.gutenberg.quote import QuoteRule
from block_convert.rules.gutenberg.table import TableRule

__all__ = [
    "ButtonRule",
    "CodeRule",
    "DetailsRule",
    "GroupRule",
    "GutenbergRule",
    "HeadingRule",
    "ImageRule",
    "ListRule",
    "ParagraphRule",
    "QuoteRule",
    "TableRule",
]
