# ABOUTME: Background library discovery: walks a directory tree and groups media files into books.
# ABOUTME: Probes each admitted file, resolves book metadata, and writes every book to the store.

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from audioshelf.db.errors import BookWriteError
from audioshelf.db.mapping import parse_track_number
from audioshelf.formats.media import PLAYLIST_EXTENSIONS, InspectFn, MediaReadError, inspect_media
from audioshelf.metadata.resolver import resolve_book_info
from audioshelf.metadata.types import Book, MediaFile

if TYPE_CHECKING:
    from audioshelf.core.tasks import TaskRunner
    from audioshelf.db.catalog import LibraryStore

logger = logging.getLogger(__name__)

# Companion files that never carry book audio
IGNORE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".nfo", ".txt", ".pdf", ".epub", ".mobi", ".log",
        ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bmp", ".tga",
        ".srt", ".cue",
    }
)


def _is_dir(entry: Path) -> bool:
    try:
        return entry.is_dir()
    except OSError as exc:
        logger.warning("Cannot inspect %s: %s", entry, exc)
        return False


def _is_regular_file(entry: Path) -> bool:
    try:
        return entry.is_file()
    except OSError as exc:
        logger.warning("Cannot inspect %s: %s", entry, exc)
        return False


def walk_tree(root: Path) -> Iterator[Path]:
    """Yield every entry below root, depth-first and pre-order.

    Within a directory, files come before subdirectories and each group is
    sorted by name. Symlinked directories are yielded but not descended into.
    Entries that cannot be inspected are yielded as plain files.
    The root itself is not yielded.
    """
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.warning("Cannot list %s: %s", root, exc)
        return

    directories = []
    for entry in entries:
        if _is_dir(entry):
            directories.append(entry)
        else:
            yield entry

    for directory in directories:
        yield directory
        if not directory.is_symlink():
            yield from walk_tree(directory)


@dataclass
class GroupingCursor:
    """Tracks which candidate book is open while walking a tree.

    Every directory opens a new book. When two directories arrive back to
    back, the first one had no files of its own and its book is discarded.
    """

    books: list[Book] = field(default_factory=list)
    open_index: int | None = None
    previous_was_directory: bool = False

    def open_directory(self, directory: Path) -> None:
        if self.previous_was_directory and self.books:
            self.books.pop()
        self.previous_was_directory = True
        self.books.append(Book(folder=str(directory), name=directory.name))
        self.open_index = len(self.books) - 1

    def mark_file(self) -> None:
        self.previous_was_directory = False

    def add_file(self, media: MediaFile) -> bool:
        """Append a file to the open book. Returns False when no book is open."""
        if self.open_index is None:
            return False
        self.books[self.open_index].files.append(media)
        return True


def is_ignored(path: Path) -> bool:
    """Whether a file is a companion file that is never cataloged."""
    return path.suffix.lower() in IGNORE_EXTENSIONS


def is_playlist(path: Path) -> bool:
    """Whether a file is a playlist."""
    return path.suffix.lower() in PLAYLIST_EXTENSIONS


class CatalogBuilder:
    """Builds the persisted book catalog from a root directory without blocking the caller.

    At most one discovery runs per builder. The book list belongs to the
    worker while is_working is true; it is published just before the flag
    clears.
    """

    def __init__(
        self,
        store: LibraryStore,
        runner: TaskRunner,
        inspect: InspectFn = inspect_media,
    ) -> None:
        self._store = store
        self._runner = runner
        self._inspect = inspect
        self._working = threading.Event()
        self._future: Future | None = None
        self._books: list[Book] = []

    @property
    def is_working(self) -> bool:
        """Whether a discovery task is in flight."""
        return self._working.is_set()

    @property
    def books(self) -> list[Book]:
        """Books produced by the last completed discovery."""
        return self._books

    def start_discovery(self, root: Path | str) -> bool:
        """Schedule a background scan of root.

        Path validation happens inside the scan itself.

        Returns:
            False if a discovery is already working, True once scheduled.
        """
        if self._working.is_set():
            logger.info("Discovery already in progress, ignoring %s", root)
            return False

        self._working.set()
        try:
            self._future = self._runner.submit(lambda: self.scan(Path(root)))
        except Exception:
            self._working.clear()
            raise
        return True

    def wait(self, timeout: float | None = None) -> None:
        """Block until the pending discovery ends, re-raising any worker failure."""
        if self._future is not None:
            self._future.result(timeout=timeout)

    def scan(self, root: Path) -> list[Book]:
        """Run one full discovery synchronously and return the persisted books.

        Files that cannot be probed are skipped. A book that fails to write
        is rolled back and left out; the scan continues with the next one.
        """
        self._books = []
        try:
            if not _is_dir(root):
                logger.warning("Library root %s is missing or not a directory", root)
                return self._books

            cursor = GroupingCursor()
            for entry in walk_tree(root):
                if _is_dir(entry):
                    cursor.open_directory(entry)
                    continue
                cursor.mark_file()
                if is_ignored(entry) or not _is_regular_file(entry):
                    continue
                media = self._probe(entry)
                if media is not None and not cursor.add_file(media):
                    logger.debug("Ignoring %s: not inside a book folder", entry)

            written: list[Book] = []
            for book in cursor.books:
                if book.is_empty:
                    continue
                resolve_book_info(book)
                try:
                    self._store.write_book(book)
                except BookWriteError as exc:
                    logger.warning("Skipping book %s: %s", book.folder, exc)
                    continue
                written.append(book)

            logger.info("Discovery of %s cataloged %d book(s)", root, len(written))
            self._books = written
            return written
        finally:
            self._working.clear()

    def _probe(self, path: Path) -> MediaFile | None:
        """Build a MediaFile for path, or None if it cannot be probed."""
        try:
            info = self._inspect(path)
            modified_ns = path.stat().st_mtime_ns
        except (MediaReadError, OSError) as exc:
            logger.debug("Skipping %s: %s", path, exc)
            return None

        return MediaFile(
            path=str(path),
            duration=info.duration,
            last_modified=modified_ns // 1_000_000,
            track_number=parse_track_number(info.meta.track_number),
            meta=info.meta,
            tracks=list(info.tracks),
            is_playlist=is_playlist(path),
        )
