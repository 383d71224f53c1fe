# ABOUTME: The `shelfnotes graph` command for the book relation graph.
# ABOUTME: Prints tag-overlap links and domain clusters, or the full graph as JSON.

import json as json_lib
from contextlib import closing
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfnotes.cli.options import db_option
from shelfnotes.core.graph import RelationGraph, build_relation_graph
from shelfnotes.db.catalog import ShelfCatalog
from shelfnotes.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("graph")
@click.option("--json", "json_output", is_flag=True, default=False,
              help="Output nodes, links, and clusters as JSON.")
@db_option
def graph(json_output: bool, db_path: Path | None) -> None:
    """Show how books relate through shared domain and theme tags."""
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        result = build_relation_graph(ShelfCatalog(conn))

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    if not result.nodes:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    _print_rich(result)


def _print_rich(result: RelationGraph) -> None:
    titles = {node.id: node.title for node in result.nodes}

    if result.links:
        table = Table(title="Related Books")
        table.add_column("Book", style="bold")
        table.add_column("Related", style="bold")
        table.add_column("Strength", justify="right")
        table.add_column("Type")
        table.add_column("Shared Tags", style="cyan")
        for link in sorted(result.links, key=lambda edge: edge.strength, reverse=True):
            table.add_row(
                titles[link.source],
                titles[link.target],
                f"{link.strength:.2f}",
                link.type.value,
                ", ".join(link.shared_tags),
            )
        console.print(table)
    else:
        console.print("[dim]No strongly related books yet.[/dim]")

    for cluster in result.clusters:
        members = ", ".join(titles[book_id] for book_id in cluster.books)
        console.print(f"[bold {cluster.color}]{cluster.name}[/]: {members}")

    console.print(
        f"\n[dim]{len(result.nodes)} book(s), {len(result.links)} link(s), "
        f"{len(result.clusters)} cluster(s)[/dim]"
    )
