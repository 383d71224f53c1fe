# ABOUTME: The `shelfnotes stats` command for reading statistics.
# ABOUTME: Shows totals, monthly counts, tag distributions, and 30-day activity.

import json as json_lib
from contextlib import closing
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfnotes.cli.options import db_option
from shelfnotes.core.stats import ReadingStats, compute_stats
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("stats")
@click.option("--json", "json_output", is_flag=True, default=False,
              help="Output statistics as JSON.")
@db_option
def stats(json_output: bool, db_path: Path | None) -> None:
    """Summarize the library: counts, tag distributions, recent activity."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        result = compute_stats(ShelfCatalog(conn))

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    _print_rich(result)


def _distribution_table(title: str, counts: dict[str, int]) -> Table:
    table = Table(title=title)
    table.add_column("Tag", style="cyan")
    table.add_column("Count", justify="right")
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(name, str(count))
    return table


def _print_rich(result: ReadingStats) -> None:
    console.print(
        f"[bold]{result.total_books} book(s), {result.total_notes} note(s)[/bold] "
        f"[dim]({result.books_this_month} book(s) and "
        f"{result.notes_this_month} note(s) this month)[/dim]"
    )

    if result.domain_distribution:
        console.print(_distribution_table("Domains", result.domain_distribution))
    if result.theme_distribution:
        console.print(_distribution_table("Themes", result.theme_distribution))
    if result.note_type_distribution:
        console.print(_distribution_table("Note Types", result.note_type_distribution))

    active_days = [day for day in result.recent_activity if day.books or day.notes]
    if active_days:
        table = Table(title="Last 30 Days")
        table.add_column("Date")
        table.add_column("Books", justify="right")
        table.add_column("Notes", justify="right")
        for day in active_days:
            table.add_row(day.date, str(day.books), str(day.notes))
        console.print(table)
