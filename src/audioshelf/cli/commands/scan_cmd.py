# ABOUTME: The `audioshelf scan` command for discovering and cataloging audiobooks.
# ABOUTME: Drives the library controller by polling while the background discovery runs.

import functools
import time
from pathlib import Path

import click
from rich.console import Console

from audioshelf.cli.options import db_option, format_duration, open_or_exit
from audioshelf.core.controller import LibraryController, LibraryState
from audioshelf.core.discovery import CatalogBuilder
from audioshelf.core.tasks import ThreadTaskRunner
from audioshelf.db.catalog import LibraryStore
from audioshelf.db.connection import DEFAULT_DB_PATH
from audioshelf.formats.media import inspect_media

console = Console()


@click.command("scan")
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@db_option
@click.option(
    "--artwork-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where embedded cover art is cached (default: artwork/ next to the database).",
)
@click.option(
    "--replace",
    is_flag=True,
    default=False,
    help="Remove previously cataloged books before scanning.",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0.0),
    default=0.1,
    show_default=True,
    help="Seconds between status polls while scanning.",
)
def scan(
    path: Path,
    db_path: Path | None,
    artwork_dir: Path | None,
    replace: bool,
    poll_interval: float,
) -> None:
    """Scan a directory for audiobooks and add them to the library."""
    db_path = db_path or DEFAULT_DB_PATH
    conn = open_or_exit(db_path, console)
    store = LibraryStore(conn)
    if replace:
        store.clear_books()

    inspect = functools.partial(
        inspect_media, artwork_dir=artwork_dir or db_path.parent / "artwork"
    )

    try:
        with ThreadTaskRunner(name="audioshelf-discovery") as runner:
            builder = CatalogBuilder(store, runner, inspect=inspect)
            controller = LibraryController(store, builder)
            controller.tick()
            controller.request_discovery(path)

            started = False
            with console.status(controller.status) as status:
                while True:
                    state = controller.tick()
                    status.update(controller.status)
                    if state == LibraryState.LIBRARY_DISCOVERY:
                        started = True
                    elif started or not controller.discovery_pending:
                        break
                    time.sleep(poll_interval)
            builder.wait()

        found = builder.books
        if not found:
            console.print(f"[yellow]No audiobooks found in {path}[/yellow]")
            return

        for book in found:
            console.print(
                f"  [green]+[/green] {book.name} "
                f"[dim]({len(book.files)} file(s), {format_duration(book.duration)})[/dim]"
            )
        console.print(
            f"\n[bold]{len(found)}[/bold] book(s) cataloged, "
            f"{len(controller.books)} in library"
        )
    finally:
        conn.close()
