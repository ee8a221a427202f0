"""HTML to block-editor markup conversion."""

__version__ = "0.1.0"

from block_convert.core.block import Block, BlockStats
from block_convert.core.context import ConversionContext
from block_convert.core.converter import ConversionResult, HtmlToBlocksConverter
from block_convert.core.extractor import BlockAnalysis, BlocksToHtmlConverter
from block_convert.exceptions import (
    BlockConvertError,
    ConfigurationError,
    ConversionError,
    DispatchError,
    RuleError,
)

__all__ = [
    "Block",
    "BlockAnalysis",
    "BlockConvertError",
    "BlockStats",
    "BlocksToHtmlConverter",
    "ConfigurationError",
    "ConversionContext",
    "ConversionError",
    "ConversionResult",
    "DispatchError",
    "HtmlToBlocksConverter",
    "RuleError",
    "__version__",
]
