# ABOUTME: The `shelfnotes search` command for combined book and note search.
# ABOUTME: Parses CLI options into a QuerySpec and prints one page of results.

import json as json_lib
from contextlib import closing
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console

from shelfnotes.cli.options import csv_callback, db_option
from shelfnotes.cli.tables import book_table, note_table
from shelfnotes.core.query import ALL_SEARCH_FIELDS, QuerySpec, SearchField, SortKey, SortOrder
from shelfnotes.core.search import search as run_search
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library
from shelfnotes.library.types import NoteType, Priority

console = Console()

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command("search")
@click.argument("query", required=False, default="")
@click.option(
    "--in",
    "search_in",
    type=click.Choice([f.value for f in SearchField]),
    multiple=True,
    help="Field to match the query against; repeatable (default: all).",
)
@click.option("--domain", "domain_tags", default=None, callback=csv_callback,
              help="Comma-separated domain tags (any may match).")
@click.option("--theme", "theme_tags", default=None, callback=csv_callback,
              help="Comma-separated theme tags (any may match).")
@click.option("--type", "note_types", type=click.Choice([t.value for t in NoteType]),
              multiple=True, help="Note type filter; repeatable.")
@click.option("--priority", "priorities", type=click.Choice([p.value for p in Priority]),
              multiple=True, help="Note priority filter; repeatable.")
@click.option("--from", "date_from", type=_DATE, default=None,
              help="Created on or after this day (YYYY-MM-DD).")
@click.option("--to", "date_to", type=_DATE, default=None,
              help="Created on or before this day (YYYY-MM-DD).")
@click.option("--sort", "sort_by", type=click.Choice([k.value for k in SortKey]),
              default=SortKey.RELEVANCE.value, show_default=True)
@click.option("--order", "sort_order", type=click.Choice([o.value for o in SortOrder]),
              default=SortOrder.DESC.value, show_default=True)
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Page size.")
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Page start.")
@click.option("--json", "json_output", is_flag=True, default=False,
              help="Output results as JSON.")
@db_option
def search(
    query: str,
    search_in: tuple[str, ...],
    domain_tags: tuple[str, ...],
    theme_tags: tuple[str, ...],
    note_types: tuple[str, ...],
    priorities: tuple[str, ...],
    date_from: datetime | None,
    date_to: datetime | None,
    sort_by: str,
    sort_order: str,
    limit: int | None,
    offset: int | None,
    json_output: bool,
    db_path: Path | None,
) -> None:
    """Search books and notes by text, tags, note fields, and dates."""
    spec = QuerySpec(
        query=query,
        search_in=frozenset(search_in) if search_in else ALL_SEARCH_FIELDS,
        domain_tags=domain_tags,
        theme_tags=theme_tags,
        note_types=note_types,
        priorities=priorities,
        date_from=date_from.date() if date_from else None,
        date_to=date_to.date() if date_to else None,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        result = run_search(ShelfCatalog(conn), spec)

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    if result.total == 0:
        console.print("[yellow]No results found.[/yellow]")
        return

    if result.books:
        console.print(book_table(result.books, title="Books"))
    if result.notes:
        console.print(note_table(result.notes, title="Notes"))

    shown = len(result.books) + len(result.notes)
    console.print(f"\n[dim]{shown} of {result.total} result(s)[/dim]")
