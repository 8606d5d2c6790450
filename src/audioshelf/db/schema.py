# ABOUTME: SQL DDL statements for the audioshelf library database schema.
# ABOUTME: Four independent tables: books, files, bookmarks, and settings.

CREATE_BOOKS_TABLE = """
CREATE TABLE IF NOT EXISTS books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    duration    INTEGER NOT NULL DEFAULT 0,
    author      TEXT,
    name        TEXT,
    series      TEXT,
    description TEXT,
    folder      TEXT,
    thumbnail   TEXT
)
"""

CREATE_FILES_TABLE = """
CREATE TABLE IF NOT EXISTS files (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id       INTEGER,
    last_modified INTEGER,
    track_number  INTEGER NOT NULL DEFAULT 0,
    path          TEXT,
    duration      INTEGER NOT NULL DEFAULT 0,
    is_playlist   INTEGER NOT NULL DEFAULT 0
)
"""

CREATE_BOOKMARKS_TABLE = """
CREATE TABLE IF NOT EXISTS bookmarks (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id     INTEGER,
    name        TEXT,
    file_id     INTEGER,
    position    INTEGER NOT NULL DEFAULT 0,
    description TEXT
)
"""

CREATE_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS settings (
    setting TEXT PRIMARY KEY,
    value   TEXT
)
"""

# Applied in order by initialize_schema(); every statement is idempotent.
SCHEMA = (
    CREATE_BOOKS_TABLE,
    CREATE_FILES_TABLE,
    CREATE_BOOKMARKS_TABLE,
    CREATE_SETTINGS_TABLE,
)
