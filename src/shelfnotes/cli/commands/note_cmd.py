# ABOUTME: The `shelfnotes note` command group for managing note cards.
# ABOUTME: Provides add, ls, edit, and rm subcommands for notes attached to books.

from contextlib import closing
from pathlib import Path

import click
from rich.console import Console

from shelfnotes.cli.options import csv_callback, db_option, split_csv
from shelfnotes.cli.tables import note_table
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library
from shelfnotes.library.types import NoteType, Priority

console = Console()


@click.group("note")
def note() -> None:
    """Manage note cards."""


@note.command("add")
@click.argument("book_id", type=int)
@click.argument("title")
@click.option("--content", default="", help="Note body.")
@click.option(
    "--type",
    "note_type",
    type=click.Choice([t.value for t in NoteType]),
    default=None,
    help="Kind of note (default: concept).",
)
@click.option(
    "--priority",
    type=click.Choice([p.value for p in Priority]),
    default=None,
    help="Importance (default: medium).",
)
@click.option("--tags", default=None, callback=csv_callback, help="Comma-separated tags.")
@click.option("--page", "page_number", type=int, default=None, help="Page number.")
@click.option("--chapter", default=None, help="Chapter name.")
@db_option
def note_add(
    book_id: int,
    title: str,
    content: str,
    note_type: str | None,
    priority: str | None,
    tags: tuple[str, ...],
    page_number: int | None,
    chapter: str | None,
    db_path: Path | None,
) -> None:
    """Attach a note card to a book."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            note_id = ShelfCatalog(conn).add_note(
                book_id,
                title,
                content=content,
                note_type=NoteType(note_type) if note_type else None,
                tags=tags,
                page_number=page_number,
                chapter=chapter,
                priority=Priority(priority) if priority else None,
            )
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Added note {note_id} to book {book_id}.")


@note.command("ls")
@click.option("--book", "book_id", type=int, default=None, help="Only notes for this book.")
@db_option
def note_ls(book_id: int | None, db_path: Path | None) -> None:
    """List note cards, most recently updated first."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        notes = ShelfCatalog(conn).list_notes(book_id)

    if not notes:
        console.print("[yellow]No notes found.[/yellow]")
        return

    console.print(note_table(notes))
    console.print(f"\n[dim]{len(notes)} note(s)[/dim]")


@note.command("edit")
@click.argument("note_id", type=int)
@click.option("--title", default=None, help="New title.")
@click.option("--content", default=None, help="New note body.")
@click.option(
    "--type",
    "note_type",
    type=click.Choice([t.value for t in NoteType]),
    default=None,
    help="New kind of note.",
)
@click.option(
    "--priority",
    type=click.Choice([p.value for p in Priority]),
    default=None,
    help="New importance.",
)
@click.option("--tags", "tags_csv", default=None, help="Replace tags (CSV).")
@click.option("--page", "page_number", type=int, default=None, help="New page number.")
@click.option("--chapter", default=None, help="New chapter name.")
@db_option
def note_edit(
    note_id: int,
    title: str | None,
    content: str | None,
    note_type: str | None,
    priority: str | None,
    tags_csv: str | None,
    page_number: int | None,
    chapter: str | None,
    db_path: Path | None,
) -> None:
    """Update fields on a note card. Only the options given are changed."""
    fields: dict[str, object] = {}
    if title is not None:
        fields["title"] = title
    if content is not None:
        fields["content"] = content
    if note_type is not None:
        fields["note_type"] = NoteType(note_type)
    if priority is not None:
        fields["priority"] = Priority(priority)
    if tags_csv is not None:
        fields["tags"] = list(split_csv(tags_csv))
    if page_number is not None:
        fields["page_number"] = page_number
    if chapter is not None:
        fields["chapter"] = chapter

    if not fields:
        console.print("[yellow]Nothing to update.[/yellow]")
        return

    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            ShelfCatalog(conn).update_note(note_id, **fields)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Updated note {note_id}.")


@note.command("rm")
@click.argument("note_id", type=int)
@db_option
def note_rm(note_id: int, db_path: Path | None) -> None:
    """Remove a note card."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            ShelfCatalog(conn).delete_note(note_id)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    console.print(f"Removed note {note_id}.")
