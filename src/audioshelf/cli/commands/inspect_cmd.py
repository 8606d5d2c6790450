# ABOUTME: The `audioshelf inspect` command for probing a single media file.
# ABOUTME: Shows duration, streams, and tag metadata as read by the media probe.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from audioshelf.cli.options import format_duration
from audioshelf.formats.media import MediaReadError, inspect_media

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show what the media probe reads from a file."""
    try:
        media = inspect_media(path)
    except MediaReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    meta = media.meta
    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Duration", format_duration(media.duration))
    tracks = ", ".join(track.type.value for track in media.tracks)
    table.add_row("Tracks", tracks or "[dim]none[/dim]")
    table.add_row("Title", meta.title or "[dim]none[/dim]")
    table.add_row("Author", meta.author or "[dim]unknown[/dim]")
    table.add_row("Track", meta.track_number or "[dim]none[/dim]")
    table.add_row("Publisher", meta.publisher or "[dim]unknown[/dim]")
    table.add_row("Description", meta.description or "[dim]none[/dim]")

    console.print(table)
