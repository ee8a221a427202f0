"""Validate command for checking HTML structure before conversion."""

import json
from pathlib import Path

import click
from rich.console import Console

from block_convert.core.html_utils import validate_html_structure

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
def validate(input_file: str, output_format: str) -> None:
    """Check an HTML file for structural problems.

    INPUT is an HTML template. Exits with status 1 when the file is invalid.
    """
    try:
        html = Path(input_file).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not read {input_file}: {e}")
        raise SystemExit(1)

    report = validate_html_structure(html)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for error in report.errors:
            console.print(f"[red]Error:[/red] {error}")
        for warning in report.warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")
        if report.is_valid:
            console.print(f"[green]'{input_file}' is valid[/green]")

    if not report.is_valid:
        raise SystemExit(1)
