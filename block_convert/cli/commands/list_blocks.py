"""List command for displaying block directories."""

from datetime import datetime, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from block_convert.cli.workspace import discover_blocks, format_size

console = Console()


@click.command("list")
@click.option("--blocks-dir", "-d", default="blocks", help="Directory holding block directories")
@click.option("--verbose", "-v", is_flag=True, help="Show when outputs were last written")
def list_blocks(blocks_dir: str, verbose: bool) -> None:
    """List block directories and their conversion outputs."""
    blocks_path = Path(blocks_dir)

    if not blocks_path.is_dir():
        console.print(f"[yellow]No blocks directory found at '{blocks_dir}'[/yellow]")
        return

    blocks = discover_blocks(blocks_path)
    if not blocks:
        console.print("[yellow]No blocks found[/yellow]")
        return

    console.print(f"\n[bold]Found {len(blocks)} block(s):[/bold]")
    table = Table(show_header=True)
    table.add_column("Block")
    table.add_column("Template")
    table.add_column("block.html")
    if verbose:
        table.add_column("Last updated")

    for block in blocks:
        template_size = format_size(block.template.stat().st_size)
        has_output = block.output.exists()
        row = [
            block.name,
            template_size,
            "[green]yes[/green]" if has_output else "[red]no[/red]",
        ]
        if verbose:
            row.append(_modified(block.output) if has_output else "-")
        table.add_row(*row)

    console.print(table)


def _modified(path: Path) -> str:
    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    return mtime.isoformat(timespec="seconds")
