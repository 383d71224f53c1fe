# ABOUTME: Shared Click options and parameter helpers for Shelfnotes CLI commands.
# ABOUTME: Provides the --db option and comma-separated list parsing.

from pathlib import Path

import click

from shelfnotes.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="SHELFNOTES_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH}, env: SHELFNOTES_DB)",
)


def split_csv(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated list, dropping blanks and surrounding spaces."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def csv_callback(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[str, ...]:
    """Click callback turning 'a,b, c' into ('a', 'b', 'c')."""
    return split_csv(value)
