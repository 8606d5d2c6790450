# ABOUTME: Shared Click options and helpers for audioshelf CLI commands.
# ABOUTME: Provides the --db option, opening the store, and duration formatting.

import sqlite3
from pathlib import Path

import click
from rich.console import Console

from audioshelf.db.connection import DEFAULT_DB_PATH, open_library
from audioshelf.db.errors import LibraryUnavailableError

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="AUDIOSHELF_DB",
    help=f"Path to library database (default: ./{DEFAULT_DB_PATH}, env: AUDIOSHELF_DB)",
)


def open_or_exit(db_path: Path | None, console: Console) -> sqlite3.Connection:
    """Open the library database, printing an error and exiting 1 on failure."""
    try:
        return open_library(db_path or DEFAULT_DB_PATH)
    except LibraryUnavailableError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc


def format_duration(milliseconds: int) -> str:
    """Format milliseconds as H:MM:SS."""
    seconds = max(milliseconds, 0) // 1000
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"
