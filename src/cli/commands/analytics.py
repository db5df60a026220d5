"""Analytics and sentiment CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from journal.analytics import build_report
from journal.sentiment import analyze_sentiment, is_classifiable
from shared_types import TimeRange

console = Console()

MOOD_BAR = {
    "positive": "[green]██[/]",
    "neutral": "[dim]██[/]",
    "negative": "[red]██[/]",
}


@click.command()
@click.option("-r", "--range", "time_range", default=TimeRange.WEEK.value,
              help="Time range: week or month (anything else means week)")
def analytics(time_range: str):
    """Show mood/productivity averages, trend and sentiment counts."""
    c = get_components()
    report = build_report(c["storage"], c["owner"], time_range=time_range)

    if not report.total_entries:
        console.print(f"[yellow]No entries in the last {report.time_range}.[/]")
        return

    table = Table(show_header=True, title=f"Trend - last {report.time_range}")
    table.add_column("Date", style="dim")
    table.add_column("Mood", justify="right")
    table.add_column("Productivity", justify="right")
    for point in report.mood_trends:
        table.add_row(point.date, str(point.mood), str(point.productivity))
    console.print(table)

    console.print(
        f"\n[bold]Entries:[/] {report.total_entries}  |  "
        f"[bold]Avg mood:[/] {report.avg_mood}  |  "
        f"[bold]Avg productivity:[/] {report.avg_productivity}"
    )
    counts = "  ".join(
        f"{MOOD_BAR.get(label, '[dim]██[/]')} {label} {n}"
        for label, n in sorted(report.sentiment_counts.items())
    )
    console.print(f"[bold]Sentiment:[/] {counts}")


@click.command()
@click.argument("text")
def classify(text: str):
    """Classify the sentiment of a piece of text."""
    if not is_classifiable(text):
        console.print("[yellow]Text too short to classify - entries default to neutral.[/]")
        return

    result = analyze_sentiment(text)
    label = result["label"]
    console.print(f"{MOOD_BAR[label]} [bold]{label}[/]")
    console.print(
        f"[dim]positive: {', '.join(result['positive_hits']) or '-'}  |  "
        f"negative: {', '.join(result['negative_hits']) or '-'}[/]"
    )
