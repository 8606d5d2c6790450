# ABOUTME: Read/write operations for the audioshelf library database.
# ABOUTME: Books and their files, bookmarks, and key/value settings over a sqlite3 connection.

import logging
import sqlite3
from collections import defaultdict
from typing import Any

from audioshelf.db.connection import initialize_schema
from audioshelf.db.errors import BookWriteError, LibraryError
from audioshelf.db.mapping import (
    book_to_row,
    media_to_row,
    row_to_book,
    row_to_bookmark,
    row_to_media,
)
from audioshelf.db.schema import CREATE_SETTINGS_TABLE
from audioshelf.metadata.types import LAST_POSITION_BOOKMARK, Book, Bookmark, MediaFile

logger = logging.getLogger(__name__)

SETTING_LAST_BOOK_ID = "last_book_id"
SETTING_PLAYING_SPEED = "playing_speed"


def _insert(conn: sqlite3.Connection, table: str, row: dict[str, Any]) -> int:
    """INSERT a row dict into a table and return the new row id."""
    columns = ", ".join(row.keys())
    placeholders = ", ".join("?" for _ in row)
    cursor = conn.execute(
        f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
        list(row.values()),
    )
    return cursor.lastrowid  # type: ignore[return-value]


class LibraryStore:
    """Wraps a sqlite3 connection and provides typed access to the library tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def initialize(self) -> None:
        """Create any missing tables. Idempotent.

        Raises:
            LibraryUnavailableError: If a table cannot be created.
        """
        initialize_schema(self._conn)

    # --- Books ---

    def write_book(self, book: Book) -> int:
        """Insert a book and all of its files in a single transaction.

        The book row is inserted first so its id can be bound to every file
        row. Nothing is committed unless every insert succeeds. On success the
        assigned ids are set on the book and its files.

        Args:
            book: A resolved book with at least one file.

        Returns:
            The id assigned to the book.

        Raises:
            ValueError: If the book has no files.
            BookWriteError: If any insert failed. No rows for the book remain.
        """
        if book.is_empty:
            raise ValueError(f"Refusing to write book without files: {book.folder}")

        try:
            with self._conn:
                book_id = _insert(self._conn, "books", book_to_row(book))
                file_ids = [
                    _insert(self._conn, "files", media_to_row(media, book_id))
                    for media in book.files
                ]
        except sqlite3.Error as exc:
            raise BookWriteError(f"Failed to write book {book.folder}: {exc}") from exc

        book.id = book_id
        for media, file_id in zip(book.files, file_ids):
            media.id = file_id
            media.book_id = book_id
        return book_id

    def read_all_books(self) -> list[Book]:
        """Return every cataloged book with its files, in insertion order.

        Thumbnail references are returned as stored; turning them into a
        displayable image is up to the caller.
        """
        files_by_book: dict[int, list[MediaFile]] = defaultdict(list)
        cursor = self._conn.execute("SELECT * FROM files ORDER BY id")
        for row in cursor.fetchall():
            files_by_book[row["book_id"]].append(row_to_media(row))

        cursor = self._conn.execute("SELECT * FROM books ORDER BY id")
        return [row_to_book(row, files_by_book.get(row["id"], [])) for row in cursor.fetchall()]

    def get_book(self, book_id: int) -> Book | None:
        """Retrieve a single book and its files by id."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        if row is None:
            return None
        files = [
            row_to_media(file_row)
            for file_row in self._conn.execute(
                "SELECT * FROM files WHERE book_id = ? ORDER BY id", (book_id,)
            ).fetchall()
        ]
        return row_to_book(row, files)

    def clear_books(self) -> None:
        """Delete every book and file row. Bookmarks and settings are kept."""
        with self._conn:
            self._conn.execute("DELETE FROM files")
            self._conn.execute("DELETE FROM books")

    # --- Settings ---

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        """Return the value stored for a setting, or default if unset."""
        cursor = self._conn.execute("SELECT value FROM settings WHERE setting = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else default

    def set_setting(self, key: str, value: str) -> None:
        """Store a setting, replacing any previous value."""
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO settings (setting, value) VALUES (?, ?)",
                (key, value),
            )

    def list_settings(self) -> dict[str, str]:
        """Return all settings as a dict, sorted by key."""
        cursor = self._conn.execute("SELECT setting, value FROM settings ORDER BY setting")
        return {row[0]: row[1] for row in cursor.fetchall()}

    def reset_settings(self) -> None:
        """Drop the settings table and recreate it empty. Irreversible.

        Raises:
            LibraryError: If the table could not be dropped or recreated.
        """
        try:
            with self._conn:
                self._conn.execute("DROP TABLE settings")
                self._conn.execute(CREATE_SETTINGS_TABLE)
        except sqlite3.Error as exc:
            logger.warning("Failed to reset settings table: %s", exc)
            raise LibraryError(f"Failed to reset settings table: {exc}") from exc

    # --- Bookmarks ---

    def add_bookmark(self, bookmark: Bookmark) -> int:
        """Add a user bookmark and return its id.

        Raises:
            ValueError: If the bookmark uses the reserved last-position name.
        """
        if bookmark.is_last_position:
            raise ValueError(f"'{LAST_POSITION_BOOKMARK}' is reserved for the last position")

        with self._conn:
            bookmark.id = _insert(self._conn, "bookmarks", {
                "book_id": bookmark.book_id,
                "name": bookmark.name,
                "file_id": bookmark.file_id,
                "position": bookmark.position,
                "description": bookmark.description,
            })
        return bookmark.id

    def list_bookmarks(self, book_id: int) -> list[Bookmark]:
        """Return user bookmarks of a book ordered by id. The last position is excluded."""
        cursor = self._conn.execute(
            "SELECT * FROM bookmarks WHERE book_id = ? AND name != ? ORDER BY id",
            (book_id, LAST_POSITION_BOOKMARK),
        )
        return [row_to_bookmark(row) for row in cursor.fetchall()]

    def save_last_position(self, book_id: int, file_id: int | None, position: int) -> None:
        """Record the last playback position of a book, replacing the previous one."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE bookmarks SET file_id = ?, position = ? WHERE book_id = ? AND name = ?",
                (file_id, position, book_id, LAST_POSITION_BOOKMARK),
            )
            if cursor.rowcount == 0:
                _insert(self._conn, "bookmarks", {
                    "book_id": book_id,
                    "name": LAST_POSITION_BOOKMARK,
                    "file_id": file_id,
                    "position": position,
                    "description": "",
                })

    def get_last_position(self, book_id: int) -> Bookmark | None:
        """Return the last playback position of a book, if one was saved."""
        cursor = self._conn.execute(
            "SELECT * FROM bookmarks WHERE book_id = ? AND name = ?",
            (book_id, LAST_POSITION_BOOKMARK),
        )
        row = cursor.fetchone()
        return row_to_bookmark(row) if row else None
