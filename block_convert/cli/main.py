"""Main CLI entry point for block-convert."""

import logging

import click
from rich.logging import RichHandler

from block_convert import __version__
from block_convert.cli.commands import (
    analyze,
    convert,
    convert_block,
    list_blocks,
    providers,
    to_html,
    validate,
)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool) -> None:
    """Block-convert - HTML to CMS block markup converter.

    Converts HTML templates into block-editor markup in one of several
    block dialects, and turns block markup back into plain HTML.

    \b
    CONVERSION:
      block-convert convert                  Convert every block directory
      block-convert convert-block <name>     Convert one block directory
      block-convert to-html <file>           Strip block markers from markup

    \b
    INSPECTION:
      block-convert list                     List block directories
      block-convert analyze <file>           Count blocks in markup
      block-convert validate <file>          Check HTML structure
      block-convert providers                Show rules in dispatch order
    """
    setup_logging(verbose)


cli.add_command(convert)
cli.add_command(convert_block)
cli.add_command(list_blocks)
cli.add_command(to_html)
cli.add_command(analyze)
cli.add_command(validate)
cli.add_command(providers)


if __name__ == "__main__":
    cli()
