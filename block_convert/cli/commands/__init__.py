"""CLI commands for block-convert."""

from block_convert.cli.commands.analyze import analyze
from block_convert.cli.commands.convert import convert, convert_block
from block_convert.cli.commands.list_blocks import list_blocks
from block_convert.cli.commands.providers import providers
from block_convert.cli.commands.to_html import to_html
from block_convert.cli.commands.validate import validate

__all__ = [
    "analyze",
    "convert",
    "convert_block",
    "list_blocks",
    "providers",
    "to_html",
    "validate",
]
