# ABOUTME: The `audioshelf info` command for displaying one cataloged book.
# ABOUTME: Shows book fields, its files, bookmarks, and the last playback position.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audioshelf.cli.options import db_option, format_duration, open_or_exit
from audioshelf.db.catalog import LibraryStore
from audioshelf.formats.artwork import thumbnail_path

console = Console()


@click.command("info")
@click.argument("book_id", type=int)
@db_option
def info(book_id: int, db_path: Path | None) -> None:
    """Show details for a book by ID."""
    conn = open_or_exit(db_path, console)
    try:
        store = LibraryStore(conn)
        book = store.get_book(book_id)
        if book is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        bookmarks = store.list_bookmarks(book_id)
        last = store.get_last_position(book_id)
    finally:
        conn.close()

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(book.id))
    table.add_row("Title", book.name)
    table.add_row("Author", book.author or "unknown")
    if book.series:
        table.add_row("Series", book.series)
    if book.description:
        table.add_row("Description", book.description)
    table.add_row("Duration", format_duration(book.duration))
    table.add_row("Folder", book.folder)
    if book.thumbnail:
        cover = thumbnail_path(book.thumbnail)
        if cover is not None and cover.exists():
            table.add_row("Cover", str(cover))
        else:
            table.add_row("Cover", f"{book.thumbnail} [dim](unavailable)[/dim]")
    if last is not None:
        table.add_row("Last position", format_duration(last.position))
    console.print(table)

    files = Table(title="Files")
    files.add_column("#", justify="right", width=4)
    files.add_column("Path")
    files.add_column("Duration", justify="right")
    for media in book.files:
        name = Path(media.path).name
        if media.is_playlist:
            name += " [dim](playlist)[/dim]"
        files.add_row(str(media.track_number), name, format_duration(media.duration))
    console.print(files)

    for bookmark in bookmarks:
        console.print(f"  [cyan]{bookmark.name}[/cyan] at {format_duration(bookmark.position)}")
