"""Universal fallback rule."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.rule import BaseRule


class FallbackRule(BaseRule):
    """Wraps any element verbatim in a ``core/html`` block.

    Registered last with the lowest priority so dispatch always finds a rule.
    """

    name = "fallback"
    priority = 1
    supported_elements = ("*",)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return True

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        return self.html_fallback(element)
