# ABOUTME: Rich table builders shared by the book, note, and search commands.
# ABOUTME: Renders Book and NoteCard lists with resolved note defaults.

from rich.table import Table

from shelfnotes.library.types import Book, NoteCard, resolve_note_type, resolve_priority

_PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "dim"}


def book_table(books: list[Book], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Domain", style="cyan")
    table.add_column("Theme", style="magenta")

    for book in books:
        table.add_row(
            str(book.id),
            book.title,
            book.author or "[dim]unknown[/dim]",
            ", ".join(book.domain_tags),
            ", ".join(book.theme_tags),
        )
    return table


def note_table(notes: list[NoteCard], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", width=4)
    table.add_column("Book", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Type")
    table.add_column("Priority")
    table.add_column("Where")

    for note in notes:
        priority = resolve_priority(note).value
        where = []
        if note.chapter:
            where.append(note.chapter)
        if note.page_number is not None:
            where.append(f"p. {note.page_number}")
        table.add_row(
            str(note.id),
            str(note.book_id),
            note.title,
            resolve_note_type(note).value,
            f"[{_PRIORITY_STYLES[priority]}]{priority}[/{_PRIORITY_STYLES[priority]}]",
            ", ".join(where),
        )
    return table
