"""Convert commands for turning block templates into block markup."""

from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.table import Table

from block_convert.cli.workspace import BlockDirectory, discover_blocks
from block_convert.config import load_options
from block_convert.core.context import ConversionContext
from block_convert.core.converter import ConversionResult, HtmlToBlocksConverter
from block_convert.core.dialects import DEFAULT_DIALECT, DIALECTS
from block_convert.exceptions import ConfigurationError

console = Console()


def conversion_options(func: Callable) -> Callable:
    """Options shared by ``convert`` and ``convert-block``."""
    options = [
        click.option("--blocks-dir", "-d", default="blocks", help="Directory holding block directories"),
        click.option(
            "--dialect",
            type=click.Choice(sorted(DIALECTS)),
            default=DEFAULT_DIALECT,
            help="Output block dialect",
        ),
        click.option("--no-classes", is_flag=True, help="Drop source CSS classes"),
        click.option("--no-unique-ids", is_flag=True, help="Do not generate unique ids"),
        click.option("--no-semantic", is_flag=True, help="Disable semantic element mapping"),
        click.option("--preserve-styles", is_flag=True, help="Keep inline style attributes"),
        click.option(
            "--options",
            "options_file",
            type=click.Path(exists=True, dir_okay=False),
            help="YAML file with conversion options",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Show block counts per template"),
        click.option("--dry-run", is_flag=True, help="Convert without writing output files"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command()
@conversion_options
def convert(
    blocks_dir: str,
    dialect: str,
    no_classes: bool,
    no_unique_ids: bool,
    no_semantic: bool,
    preserve_styles: bool,
    options_file: Optional[str],
    verbose: bool,
    dry_run: bool,
) -> None:
    """Convert every block template.

    Each BLOCKS_DIR/<name>/template.html is converted and written to
    block.html (minified) and unminified.html in the same directory.

    Examples:
        block-convert convert
        block-convert convert -d theme/blocks --dialect greenshift
        block-convert convert --no-classes --dry-run
    """
    context = _build_context(options_file, no_classes, no_unique_ids, no_semantic, preserve_styles)

    blocks = discover_blocks(Path(blocks_dir))
    if not blocks:
        console.print(f"[yellow]No blocks found in '{blocks_dir}'[/yellow]")
        return

    _convert_blocks(blocks, dialect, context, verbose, dry_run)


@click.command("convert-block")
@click.argument("name")
@conversion_options
def convert_block(
    name: str,
    blocks_dir: str,
    dialect: str,
    no_classes: bool,
    no_unique_ids: bool,
    no_semantic: bool,
    preserve_styles: bool,
    options_file: Optional[str],
    verbose: bool,
    dry_run: bool,
) -> None:
    """Convert a single block template.

    NAME is the block directory under the blocks directory.
    """
    context = _build_context(options_file, no_classes, no_unique_ids, no_semantic, preserve_styles)

    blocks = discover_blocks(Path(blocks_dir))
    matching = [block for block in blocks if block.name == name]
    if not matching:
        available = ", ".join(block.name for block in blocks) or "none"
        console.print(f"[red]Error:[/red] Block '{name}' not found. Available blocks: {available}")
        raise SystemExit(1)

    _convert_blocks(matching, dialect, context, verbose, dry_run)


def _build_context(
    options_file: Optional[str],
    no_classes: bool,
    no_unique_ids: bool,
    no_semantic: bool,
    preserve_styles: bool,
) -> ConversionContext:
    """Combine an options file with command-line flags, flags winning."""
    try:
        context = load_options(options_file) if options_file else ConversionContext()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    changes = {}
    if no_classes:
        changes["preserve_classes"] = False
    if no_unique_ids:
        changes["generate_unique_ids"] = False
    if no_semantic:
        changes["semantic_mapping"] = False
    if preserve_styles:
        changes["preserve_styles"] = True
    return context.derive(**changes)


def _convert_blocks(
    blocks: list[BlockDirectory],
    dialect: str,
    context: ConversionContext,
    verbose: bool,
    dry_run: bool,
) -> None:
    """Convert block directories and report, exiting 1 on any failure."""
    converter = HtmlToBlocksConverter(dialect)
    console.print(f"\n[bold]Converting {len(blocks)} block(s)[/bold] [dim]({converter.dialect})[/dim]")

    results: list[tuple[BlockDirectory, ConversionResult]] = []
    for block in blocks:
        result = _convert_one(converter, block, context, dry_run)
        results.append((block, result))
        if verbose and result.success:
            _show_details(block, result)

    _show_summary(results, dry_run)

    failed = sum(1 for _, result in results if not result.success)
    if failed:
        console.print(f"\n[red]{failed} block(s) failed to convert[/red]")
        raise SystemExit(1)


def _convert_one(
    converter: HtmlToBlocksConverter,
    block: BlockDirectory,
    context: ConversionContext,
    dry_run: bool,
) -> ConversionResult:
    try:
        html = block.template.read_text(encoding="utf-8")
    except OSError as e:
        return ConversionResult.failure(f"Could not read {block.template}: {e}")

    result = converter.convert(html, context)
    if not result.success or dry_run:
        return result

    try:
        block.output.write_text(result.minified_markup, encoding="utf-8")
        block.unminified_output.write_text(result.unminified_markup, encoding="utf-8")
    except OSError as e:
        return ConversionResult.failure(f"Could not write output: {e}", original_html=html)
    return result


def _show_details(block: BlockDirectory, result: ConversionResult) -> None:
    """Print block counts for one converted template."""
    console.print(f"\n[bold]{block.name}[/bold]")
    table = Table(show_header=True)
    table.add_column("Block")
    table.add_column("Count", justify="right")
    for block_name, count in sorted(result.stats.block_types.items()):
        table.add_row(block_name, str(count))
    console.print(table)


def _show_summary(results: list[tuple[BlockDirectory, ConversionResult]], dry_run: bool) -> None:
    table = Table(title="Conversion Summary", show_header=True)
    table.add_column("Block")
    table.add_column("Status")
    table.add_column("Blocks", justify="right")
    table.add_column("HTML fallbacks", justify="right")
    table.add_column("Output")

    for block, result in results:
        if not result.success:
            table.add_row(block.name, "[red]failed[/red]", "-", "-", result.error or "")
            continue

        status = "[cyan]dry run[/cyan]" if dry_run else "[green]converted[/green]"
        output = "-" if dry_run else str(block.output)
        table.add_row(
            block.name,
            status,
            str(result.stats.total_blocks),
            str(result.stats.html_fallback_blocks),
            output,
        )

    console.print(table)
