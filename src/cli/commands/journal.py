"""Journal CLI commands."""

import click
import structlog
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, parse_csv
from journal.errors import EntryNotFoundError, EntryValidationError, InvalidQueryError
from journal.models import new_entry
from journal.sentiment import resolve_sentiment
from shared_types import Sentiment

console = Console()
logger = structlog.get_logger()

SENTIMENT_STYLE = {
    "positive": "green",
    "neutral": "dim",
    "negative": "red",
}


def _entries_table(entries, title: str | None = None) -> Table:
    table = Table(show_header=True, title=title)
    table.add_column("Date", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Mood", justify="right")
    table.add_column("Prod.", justify="right")
    table.add_column("Sentiment")
    table.add_column("Entry")
    table.add_column("Tags", style="dim")

    for e in entries:
        style = SENTIMENT_STYLE.get(str(e.sentiment), "dim")
        preview = e.content[:40].replace("\n", " ")
        table.add_row(
            e.created_at.strftime("%Y-%m-%d"),
            e.id[:8],
            str(e.mood),
            str(e.productivity),
            f"[{style}]{e.sentiment}[/]",
            preview,
            ", ".join(e.tags[:3]),
        )
    return table


def _pagination_footer(pagination) -> str:
    return (
        f"Page {pagination.current_page}/{max(pagination.total_pages, 1)}"
        f"  |  {pagination.total_docs} entries"
    )


def _page_size(config, limit: int | None) -> int:
    cfg = config.pagination
    if limit is None:
        return cfg.default_limit
    if limit > cfg.max_limit:
        raise click.BadParameter(f"must be at most {cfg.max_limit}", param_hint="'-n' / '--limit'")
    return limit


def _resolve_id(c: dict, entry_id: str) -> str:
    """Expand a short id prefix (as shown in listings) to a full id."""
    if len(entry_id) >= 32:
        return entry_id
    storage, owner = c["storage"], c["owner"]
    entries = storage.list_by_owner(owner, skip=0, limit=storage.count_by_owner(owner))
    matches = [e.id for e in entries if e.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    return entry_id


@click.group()
def journal():
    """Manage journal entries."""
    pass


@journal.command("add")
@click.option("-m", "--mood", type=click.IntRange(1, 10), required=True, help="Mood 1-10")
@click.option("-p", "--productivity", type=click.IntRange(1, 10), required=True, help="Productivity 1-10")
@click.option("-s", "--sentiment", type=click.Choice([s.value for s in Sentiment]),
              help="Override the classified sentiment")
@click.option("--tags", help="Comma-separated tags")
@click.option("--activities", help="Comma-separated activities")
@click.option("--goals", help="Comma-separated goals")
@click.option("--gratitude", help="Comma-separated gratitude items")
@click.option("--sleep", type=click.IntRange(1, 10), help="Sleep factor 1-10")
@click.option("--exercise", type=click.IntRange(1, 10), help="Exercise factor 1-10")
@click.option("--social", type=click.IntRange(1, 10), help="Social factor 1-10")
@click.option("--work", type=click.IntRange(1, 10), help="Work factor 1-10")
@click.argument("content", required=False)
def journal_add(mood, productivity, sentiment, tags, activities, goals, gratitude,
                sleep, exercise, social, work, content):
    """Add new journal entry. Opens editor if no content provided."""
    c = get_components()

    if not content:
        content = click.edit("")
        if not content or not content.strip():
            console.print("[yellow]No content provided, cancelled.[/]")
            return

    factors = {"sleep": sleep, "exercise": exercise, "social": social, "work": work}
    try:
        entry = new_entry(
            c["owner"],
            content=content,
            mood=mood,
            productivity=productivity,
            sentiment=resolve_sentiment(content.strip(), sentiment),
            mood_factors={k: v for k, v in factors.items() if v is not None},
            tags=parse_csv(tags),
            activities=parse_csv(activities),
            goals=parse_csv(goals),
            gratitude=parse_csv(gratitude),
        )
    except EntryValidationError as e:
        raise click.ClickException(str(e))

    stored = c["storage"].insert(entry)
    logger.info("journal.entry_created", entry_id=stored.id)
    console.print(f"[green]Created:[/] {stored.id} ({stored.sentiment})")


@journal.command("list")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Page number")
@click.option("-n", "--limit", default=None, type=click.IntRange(min=1), help="Entries per page")
@click.option("--oldest-first", is_flag=True, help="Sort oldest first")
def journal_list(page: int, limit: int | None, oldest_first: bool):
    """List journal entries, newest first."""
    c = get_components()
    limit = _page_size(c["config"], limit)
    result = c["search"].list_entries(c["owner"], page=page, limit=limit, newest_first=not oldest_first)

    if not result.entries:
        console.print("[yellow]No entries found.[/]")
        return

    console.print(_entries_table(result.entries))
    console.print(f"[dim]{_pagination_footer(result.pagination)}[/]")


@journal.command("search")
@click.argument("query")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Page number")
@click.option("-n", "--limit", default=None, type=click.IntRange(min=1), help="Results per page")
def journal_search(query: str, page: int, limit: int | None):
    """Search entry content and tags."""
    c = get_components()
    limit = _page_size(c["config"], limit)
    try:
        result = c["search"].search(c["owner"], query, page=page, limit=limit)
    except InvalidQueryError as e:
        raise click.ClickException(str(e))

    if not result.entries:
        console.print("[yellow]No matches found.[/]")
        return

    console.print(_entries_table(result.entries, title=f"Matches for '{query}'"))
    console.print(f"[dim]{_pagination_footer(result.pagination)}[/]")


@journal.command("view")
@click.argument("entry_id")
def journal_view(entry_id: str):
    """View a journal entry."""
    c = get_components()
    try:
        e = c["storage"].get_by_id(c["owner"], _resolve_id(c, entry_id))
    except EntryNotFoundError:
        console.print(f"[red]Not found:[/] {entry_id}")
        return

    style = SENTIMENT_STYLE.get(str(e.sentiment), "dim")
    console.print(f"\n[cyan bold]{e.created_at.strftime('%A, %B %d, %Y')}[/]  [dim]{e.id}[/]")
    console.print(
        f"Mood: [bold]{e.mood}[/]/10  |  Productivity: [bold]{e.productivity}[/]/10"
        f"  |  Sentiment: [{style}]{e.sentiment}[/]"
    )
    if e.mood_factors:
        factors = ", ".join(f"{k} {v}" for k, v in e.mood_factors.items())
        console.print(f"[dim]Factors: {factors}[/]")
    if e.weather and e.weather.condition:
        console.print(f"[dim]Weather: {e.weather.icon or ''} {e.weather.condition}[/]")
    for label, items in (
        ("Tags", e.tags),
        ("Activities", e.activities),
        ("Goals", e.goals),
        ("Grateful for", e.gratitude),
    ):
        if items:
            console.print(f"[dim]{label}: {', '.join(items)}[/]")
    console.print()
    console.print(e.content)


@journal.command("edit")
@click.argument("entry_id")
@click.option("-m", "--mood", type=click.IntRange(1, 10), help="New mood 1-10")
@click.option("-p", "--productivity", type=click.IntRange(1, 10), help="New productivity 1-10")
@click.option("-s", "--sentiment", type=click.Choice([s.value for s in Sentiment]), help="New sentiment")
@click.option("--tags", help="Replace tags (comma-separated)")
@click.option("-c", "--content", help="Replace content")
def journal_edit(entry_id, mood, productivity, sentiment, tags, content):
    """Update fields of a journal entry."""
    c = get_components()
    fields = {
        k: v
        for k, v in {
            "mood": mood,
            "productivity": productivity,
            "sentiment": sentiment,
            "content": content,
        }.items()
        if v is not None
    }
    if tags is not None:
        fields["tags"] = parse_csv(tags)
    if not fields:
        console.print("[yellow]Nothing to update.[/]")
        return

    try:
        updated = c["storage"].update_partial(c["owner"], _resolve_id(c, entry_id), fields)
    except EntryNotFoundError:
        console.print(f"[red]Not found:[/] {entry_id}")
        return
    except EntryValidationError as e:
        raise click.ClickException(str(e))

    console.print(f"[green]Updated:[/] {updated.id}")


@journal.command("delete")
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def journal_delete(entry_id: str, yes: bool):
    """Delete a journal entry."""
    c = get_components()
    full_id = _resolve_id(c, entry_id)

    if not yes:
        if not click.confirm(f"Delete {full_id}?"):
            return

    if c["storage"].delete(c["owner"], full_id):
        console.print(f"[green]Deleted:[/] {full_id}")
    else:
        console.print(f"[red]Not found:[/] {entry_id}")
