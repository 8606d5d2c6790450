# ABOUTME: The `audioshelf ls` command for listing cataloged audiobooks.
# ABOUTME: Displays a Rich table of all books in the library database.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audioshelf.cli.options import db_option, format_duration, open_or_exit
from audioshelf.db.catalog import LibraryStore

console = Console()


@click.command("ls")
@db_option
def ls(db_path: Path | None) -> None:
    """List all books in the library catalog."""
    conn = open_or_exit(db_path, console)
    try:
        books = LibraryStore(conn).read_all_books()
    finally:
        conn.close()

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Files", justify="right")
    table.add_column("Duration", justify="right")

    for book in books:
        table.add_row(
            str(book.id),
            book.name,
            book.author or "[dim]unknown[/dim]",
            str(len(book.files)),
            format_duration(book.duration),
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
