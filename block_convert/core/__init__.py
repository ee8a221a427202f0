"""Conversion engine: block model, rule registry, transformer and serializer."""

from block_convert.core.block import Block, BlockStats
from block_convert.core.context import ConversionContext
from block_convert.core.registry import RuleRegistry
from block_convert.core.rule import BaseRule, Rule

__all__ = [
    "BaseRule",
    "Block",
    "BlockStats",
    "ConversionContext",
    "Rule",
    "RuleRegistry",
]
