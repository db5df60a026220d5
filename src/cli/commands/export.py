"""Data export CLI command."""

from pathlib import Path

import click
from rich.console import Console

from cli.utils import get_components
from journal.export import JournalExporter

console = Console()


@click.command()
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False), help="Output path")
@click.option(
    "-f",
    "--format",
    "fmt",
    default="json",
    type=click.Choice(["json", "markdown"]),
    help="Export format",
)
@click.option("--days", type=click.IntRange(min=1), help="Only entries from the last N days")
def export(output: str, fmt: str, days: int | None):
    """Export all of your journal entries to a file."""
    c = get_components()
    exporter = JournalExporter(c["storage"])
    output_path = Path(output).expanduser()

    with console.status("Exporting..."):
        if fmt == "json":
            count = exporter.export_json(c["owner"], output_path, days=days)
        else:
            count = exporter.export_markdown(c["owner"], output_path, days=days)

    console.print(f"[green]Exported {count} entries to {output_path}[/]")
