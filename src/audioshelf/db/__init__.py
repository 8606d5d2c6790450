# ABOUTME: Public API for the audioshelf library database layer.
# ABOUTME: Exports connection management, the library store, and its error types.

from audioshelf.db.catalog import (
    SETTING_LAST_BOOK_ID,
    SETTING_PLAYING_SPEED,
    LibraryStore,
)
from audioshelf.db.connection import DEFAULT_DB_PATH, initialize_schema, open_library
from audioshelf.db.errors import BookWriteError, LibraryError, LibraryUnavailableError
from audioshelf.db.mapping import parse_track_number

__all__ = [
    "DEFAULT_DB_PATH",
    "SETTING_LAST_BOOK_ID",
    "SETTING_PLAYING_SPEED",
    "BookWriteError",
    "LibraryError",
    "LibraryStore",
    "LibraryUnavailableError",
    "initialize_schema",
    "open_library",
    "parse_track_number",
]
