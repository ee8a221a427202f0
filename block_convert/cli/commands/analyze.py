"""Analyze command for counting blocks in markup."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from block_convert.core.extractor import BlocksToHtmlConverter

console = Console()


@click.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def analyze(input_file: str, output_format: str) -> None:
    """Count the blocks in a markup file.

    INPUT is a file of block markup.
    """
    try:
        markup = Path(input_file).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not read {input_file}: {e}")
        raise SystemExit(1)

    analysis = BlocksToHtmlConverter().analyze(markup)

    if output_format == "json":
        click.echo(json.dumps(analysis.to_dict(), indent=2))
        return

    if not analysis.total_blocks:
        console.print("[yellow]No blocks found[/yellow]")
        return

    console.print(f"\n[bold]Block Analysis:[/bold] {analysis.total_blocks} block(s)")
    table = Table(show_header=True)
    table.add_column("Block")
    table.add_column("Count", justify="right")
    for block_name, count in sorted(analysis.block_types.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(block_name, str(count))
    console.print(table)

    families = ", ".join(f"{family} ({count})" for family, count in sorted(analysis.family_counts.items()))
    console.print(f"Families: {families}")
    if analysis.elements:
        console.print(f"Elements: {', '.join(analysis.elements)}")
