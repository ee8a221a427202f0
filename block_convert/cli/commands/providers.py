"""Providers command for showing the rules a dialect registers."""

import click
from rich.console import Console
from rich.table import Table

from block_convert.core.converter import HtmlToBlocksConverter
from block_convert.core.dialects import DEFAULT_DIALECT, DIALECTS

console = Console()


@click.command()
@click.option(
    "--dialect",
    type=click.Choice(sorted(DIALECTS)),
    default=DEFAULT_DIALECT,
    help="Dialect to inspect",
)
def providers(dialect: str) -> None:
    """List conversion rules in dispatch order."""
    converter = HtmlToBlocksConverter(dialect)
    stats = converter.provider_stats()

    console.print(f"\n[bold]{converter.dialect}[/bold]: {DIALECTS[converter.dialect].description}")
    table = Table(show_header=True)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Priority", justify="right")
    table.add_column("Elements")

    for provider in stats["providers"]:
        table.add_row(
            provider["name"],
            str(provider["priority"]),
            ", ".join(provider["supported_elements"]),
        )

    console.print(table)
    console.print(f"[dim]{stats['total_providers']} rule(s)[/dim]")
