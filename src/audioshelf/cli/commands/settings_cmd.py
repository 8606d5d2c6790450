# ABOUTME: The `audioshelf settings` command group for library settings.
# ABOUTME: Show, set, and factory-reset the key/value settings table.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audioshelf.cli.options import db_option, open_or_exit
from audioshelf.db.catalog import LibraryStore
from audioshelf.db.errors import LibraryError

console = Console()


@click.group()
def settings() -> None:
    """Manage library settings."""


@settings.command("show")
@db_option
def show(db_path: Path | None) -> None:
    """List all stored settings."""
    conn = open_or_exit(db_path, console)
    try:
        values = LibraryStore(conn).list_settings()
    finally:
        conn.close()

    if not values:
        console.print("[dim]No settings stored.[/dim]")
        return

    table = Table()
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, value)
    console.print(table)


@settings.command("set")
@click.argument("key")
@click.argument("value")
@db_option
def set_setting(key: str, value: str, db_path: Path | None) -> None:
    """Store a setting value."""
    conn = open_or_exit(db_path, console)
    try:
        LibraryStore(conn).set_setting(key, value)
    finally:
        conn.close()
    console.print(f"[green]{key}[/green] = {value}")


@settings.command("reset")
@db_option
@click.confirmation_option(prompt="Drop all settings?")
def reset(db_path: Path | None) -> None:
    """Drop all settings. Cannot be undone."""
    conn = open_or_exit(db_path, console)
    try:
        LibraryStore(conn).reset_settings()
    except LibraryError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        conn.close()
    console.print("[yellow]Settings reset.[/yellow]")
