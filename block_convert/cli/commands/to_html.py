"""To-html command for stripping block markers from markup."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from block_convert.core.extractor import BlocksToHtmlConverter

console = Console()


@click.command("to-html")
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", help="Write HTML to file instead of stdout")
def to_html(input_file: str, output: Optional[str]) -> None:
    """Convert block markup back to plain HTML.

    INPUT is a file of block markup, such as a converted block.html.

    Examples:
        block-convert to-html blocks/hero/block.html
        block-convert to-html blocks/hero/block.html -o hero.html
    """
    try:
        markup = Path(input_file).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not read {input_file}: {e}")
        raise SystemExit(1)

    result = BlocksToHtmlConverter().convert_with_analysis(markup)
    html = result["html"]
    analysis = result["analysis"]

    if not output:
        click.echo(html)
        return

    try:
        Path(output).write_text(html + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not write {output}: {e}")
        raise SystemExit(1)

    console.print(f"[green]Wrote HTML to {output}[/green]")
    console.print(f"  Blocks removed: {analysis.total_blocks}")
    for family, count in sorted(analysis.family_counts.items()):
        console.print(f"  {family}: {count}")
