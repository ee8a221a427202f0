"""Recursive HTML tree to block tree transformation."""

from __future__ import annotations

import logging
from typing import Callable

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import is_text
from block_convert.core.registry import RuleRegistry, rule_name
from block_convert.exceptions import BlockConvertError, ConversionError, DispatchError

logger = logging.getLogger(__name__)

TextWrapper = Callable[[str, ConversionContext], Block]


class TreeTransformer:
    """Walks an element tree and converts it through a rule registry.

    The transformer is also the child dispatcher bound to every rule, so
    composite rules convert their children through the same registry.
    """

    def __init__(self, registry: RuleRegistry, wrap_text: TextWrapper) -> None:
        """Initialize the transformer.

        Args:
            registry: Rules to dispatch to.
            wrap_text: Builds a block for bare top-level text.
        """
        self.registry = registry
        self.wrap_text = wrap_text
        registry.attach(self)

    def transform(self, root: Tag, context: ConversionContext) -> list[Block]:
        """Convert the children of a root element.

        Args:
            root: Parsed fragment root (normally ``body``).
            context: Conversion options for the whole tree.

        Returns:
            Top-level blocks in document order.
        """
        blocks: list[Block] = []
        for node in root.children:
            if isinstance(node, Tag):
                blocks.append(self.convert_element(node, context))
            elif is_text(node):
                text = str(node).strip()
                if text:
                    blocks.append(self.wrap_text(text, context))
        return blocks

    def convert_element(self, element: Tag, context: ConversionContext) -> Block:
        """Convert one element with the highest-priority matching rule.

        Raises:
            DispatchError: If no rule matches.
            ConversionError: If the matched rule fails.
        """
        rule = self.registry.dispatch(element, context)
        if rule is None:
            raise DispatchError(element.name)

        logger.debug("<%s> -> %s", element.name, rule_name(rule))
        try:
            return rule.convert(element, context)
        except BlockConvertError:
            raise
        except Exception as e:
            raise ConversionError(rule_name(rule), element.name, str(e)) from e
