# ABOUTME: The `shelfnotes book` command group for cataloging books.
# ABOUTME: Provides add, import (from EPUB), ls, info, edit, and rm subcommands.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfnotes.cli.options import csv_callback, db_option, split_csv
from shelfnotes.cli.tables import book_table
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library
from shelfnotes.formats.epub import EpubReadError, read_epub_details

console = Console()

domain_option = click.option(
    "--domain",
    "domain_tags",
    default=None,
    callback=csv_callback,
    help="Comma-separated domain tags.",
)
theme_option = click.option(
    "--theme",
    "theme_tags",
    default=None,
    callback=csv_callback,
    help="Comma-separated theme tags.",
)


@click.group("book")
def book() -> None:
    """Manage cataloged books."""


@book.command("add")
@click.argument("title")
@click.option("--author", default=None, help="Author name.")
@click.option("--description", default=None, help="Short description.")
@domain_option
@theme_option
@db_option
def book_add(
    title: str,
    author: str | None,
    description: str | None,
    domain_tags: tuple[str, ...],
    theme_tags: tuple[str, ...],
    db_path: Path | None,
) -> None:
    """Add a book to the library."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        catalog = ShelfCatalog(conn)
        try:
            book_id = catalog.add_book(
                title,
                author=author,
                description=description,
                domain_tags=domain_tags,
                theme_tags=theme_tags,
            )
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Added [bold]{title}[/bold] as book {book_id}.")


@book.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@domain_option
@theme_option
@db_option
def book_import(
    path: Path,
    domain_tags: tuple[str, ...],
    theme_tags: tuple[str, ...],
    db_path: Path | None,
) -> None:
    """Catalog a book from an EPUB file's metadata."""
    try:
        details = read_epub_details(path)
    except EpubReadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        book_id = ShelfCatalog(conn).add_book(
            details.title,
            author=details.author,
            description=details.description,
            domain_tags=domain_tags,
            theme_tags=theme_tags,
        )

    console.print(f"Imported [bold]{details.title}[/bold] as book {book_id}.")


@book.command("ls")
@db_option
def book_ls(db_path: Path | None) -> None:
    """List all books, most recently updated first."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        books = ShelfCatalog(conn).list_books()

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    console.print(book_table(books))
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")


@book.command("info")
@click.argument("book_id", type=int)
@db_option
def book_info(book_id: int, db_path: Path | None) -> None:
    """Show details and note count for a book by ID."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        catalog = ShelfCatalog(conn)
        record = catalog.get_book(book_id)
        note_count = len(catalog.list_notes(book_id)) if record else 0

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(record.id))
    table.add_row("Title", record.title)
    table.add_row("Author", record.author or "unknown")
    if record.description:
        table.add_row("Description", record.description)
    if record.domain_tags:
        table.add_row("Domain", ", ".join(record.domain_tags))
    if record.theme_tags:
        table.add_row("Theme", ", ".join(record.theme_tags))
    table.add_row("Notes", str(note_count))
    table.add_row("Added", record.created_at)
    table.add_row("Modified", record.updated_at)

    console.print(table)


@book.command("edit")
@click.argument("book_id", type=int)
@click.option("--title", default=None, help="New title.")
@click.option("--author", default=None, help="New author.")
@click.option("--description", default=None, help="New description.")
@click.option("--domain", "domain_csv", default=None, help="Replace domain tags (CSV).")
@click.option("--theme", "theme_csv", default=None, help="Replace theme tags (CSV).")
@db_option
def book_edit(
    book_id: int,
    title: str | None,
    author: str | None,
    description: str | None,
    domain_csv: str | None,
    theme_csv: str | None,
    db_path: Path | None,
) -> None:
    """Update fields on a book. Only the options given are changed."""
    fields: dict[str, object] = {}
    if title is not None:
        fields["title"] = title
    if author is not None:
        fields["author"] = author
    if description is not None:
        fields["description"] = description
    if domain_csv is not None:
        fields["domain_tags"] = list(split_csv(domain_csv))
    if theme_csv is not None:
        fields["theme_tags"] = list(split_csv(theme_csv))

    if not fields:
        console.print("[yellow]Nothing to update.[/yellow]")
        return

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            ShelfCatalog(conn).update_book(book_id, **fields)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Updated book {book_id}.")


@book.command("rm")
@click.argument("book_id", type=int)
@db_option
def book_rm(book_id: int, db_path: Path | None) -> None:
    """Remove a book and all of its notes."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            ShelfCatalog(conn).delete_book(book_id)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Removed book {book_id} and its notes.")
