# ABOUTME: The `shelfnotes tag` command group for browsing the tag taxonomy.
# ABOUTME: Lists domain and theme categories with their leaf tags.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfnotes.cli.options import db_option
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library
from shelfnotes.library.types import TagType

console = Console()


@click.group("tag")
def tag() -> None:
    """Browse the domain and theme tag taxonomy."""


@tag.command("ls")
@click.option(
    "--type",
    "tag_type",
    type=click.Choice([t.value for t in TagType]),
    default=None,
    help="Only list one taxonomy dimension.",
)
@db_option
def tag_ls(tag_type: str | None, db_path: Path | None) -> None:
    """List taxonomy categories and their tags."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        tags = ShelfCatalog(conn).list_tags(TagType(tag_type) if tag_type else None)

    if not tags:
        console.print("[yellow]No tags in the library.[/yellow]")
        return

    leaves: dict[tuple[TagType, str], list[str]] = {}
    for entry in tags:
        if entry.category is not None:
            leaves.setdefault((entry.tag_type, entry.category), []).append(entry.name)

    table = Table()
    table.add_column("Type", style="dim")
    table.add_column("Category", style="bold cyan")
    table.add_column("Tags")

    for entry in tags:
        if entry.is_category:
            names = leaves.get((entry.tag_type, entry.name), [])
            table.add_row(entry.tag_type.value, entry.name, ", ".join(names))

    console.print(table)
