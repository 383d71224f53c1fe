# ABOUTME: CLI package for Shelfnotes, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from shelfnotes.cli.commands import (
    book_cmd,
    graph_cmd,
    note_cmd,
    search_cmd,
    stats_cmd,
    tag_cmd,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="shelfnotes")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Shelfnotes - catalog books, keep notes, and explore how they relate."""
    _configure_logging(verbose)


cli.add_command(book_cmd.book)
cli.add_command(note_cmd.note)
cli.add_command(tag_cmd.tag)
cli.add_command(search_cmd.search)
cli.add_command(graph_cmd.graph)
cli.add_command(stats_cmd.stats)
