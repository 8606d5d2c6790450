# ABOUTME: Converts between catalog dataclasses and SQLite row dictionaries.
# ABOUTME: Handles track-number coercion and boolean/integer column conversion.

import re
from typing import Any

from audioshelf.metadata.types import Book, Bookmark, MediaFile, Meta

# Leading integer of a tag value, e.g. "3" in "3/12"
_TRACK_NUMBER_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_track_number(text: str | None) -> int:
    """Parse a track-number tag into an integer.

    Uses the leading integer of the text, so "3/12" yields 3. Empty or
    non-numeric text yields 0.
    """
    if not text:
        return 0
    match = _TRACK_NUMBER_RE.match(text)
    return int(match.group(1)) if match else 0


def book_to_row(book: Book) -> dict[str, Any]:
    """Convert a Book to a dict suitable for INSERT into the books table."""
    return {
        "duration": book.duration,
        "author": book.author,
        "name": book.name,
        "series": book.series,
        "description": book.description,
        "folder": book.folder,
        "thumbnail": book.thumbnail,
    }


def media_to_row(media: MediaFile, book_id: int) -> dict[str, Any]:
    """Convert a MediaFile to a dict suitable for INSERT into the files table.

    The track number comes from the file's tag text when present, otherwise
    from the already parsed track_number field.
    """
    if media.meta.track_number:
        track_number = parse_track_number(media.meta.track_number)
    else:
        track_number = media.track_number
    return {
        "book_id": book_id,
        "last_modified": media.last_modified,
        "track_number": track_number,
        "path": media.path,
        "duration": media.duration,
        "is_playlist": int(media.is_playlist),
    }


def row_to_media(row: Any) -> MediaFile:
    """Convert a files row back to a MediaFile. Tag data is not stored and stays empty."""
    return MediaFile(
        id=row["id"],
        book_id=row["book_id"],
        path=row["path"] or "",
        duration=row["duration"] or 0,
        last_modified=row["last_modified"] or 0,
        track_number=row["track_number"] or 0,
        meta=Meta(),
        is_playlist=bool(row["is_playlist"]),
    )


def row_to_book(row: Any, files: list[MediaFile] | None = None) -> Book:
    """Convert a books row back to a Book, attaching any already loaded files."""
    return Book(
        id=row["id"],
        folder=row["folder"] or "",
        name=row["name"] or "",
        author=row["author"] or "",
        series=row["series"] or "",
        description=row["description"] or "",
        duration=row["duration"] or 0,
        thumbnail=row["thumbnail"] or "",
        files=files if files is not None else [],
    )


def row_to_bookmark(row: Any) -> Bookmark:
    """Convert a bookmarks row to a Bookmark."""
    return Bookmark(
        id=row["id"],
        book_id=row["book_id"],
        name=row["name"] or "",
        file_id=row["file_id"],
        position=row["position"] or 0,
        description=row["description"] or "",
    )
