# ABOUTME: SQLite database connection management for the audioshelf library catalog.
# ABOUTME: Opens or creates the database file, applies the schema, and configures the connection.

import logging
import sqlite3
from pathlib import Path

from audioshelf.db.errors import LibraryUnavailableError
from audioshelf.db.schema import SCHEMA

logger = logging.getLogger(__name__)

LIBRARY_DB_NAME = "library.db"
DEFAULT_DB_PATH = Path(LIBRARY_DB_NAME)


def initialize_schema(conn: sqlite3.Connection) -> None:
    """Create all library tables that do not exist yet.

    Safe to call any number of times; existing tables and rows are untouched.

    Raises:
        LibraryUnavailableError: If a table cannot be created.
    """
    try:
        for statement in SCHEMA:
            conn.execute(statement)
        conn.commit()
    except sqlite3.Error as exc:
        raise LibraryUnavailableError(f"Cannot create library tables: {exc}") from exc


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the audioshelf library database.

    Creates the database file and parent directories if they don't exist and
    applies the schema. Sets WAL journal mode and sqlite3.Row factory for
    dict-like column access.

    The connection is opened with check_same_thread=False: it is handed to
    the discovery worker and back, but never used by two threads at once.

    Args:
        path: Path to the database file. Defaults to ./library.db.

    Returns:
        A configured sqlite3.Connection.

    Raises:
        LibraryUnavailableError: If the database cannot be opened or initialized.
    """
    db_path = path or DEFAULT_DB_PATH

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
    except (OSError, sqlite3.Error) as exc:
        raise LibraryUnavailableError(f"Cannot open library database {db_path}: {exc}") from exc

    logger.debug("Opened library database %s", db_path)
    try:
        initialize_schema(conn)
    except LibraryUnavailableError:
        conn.close()
        raise
    return conn
