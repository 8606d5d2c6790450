# ABOUTME: Integration tests for discovery end to end: walk, probe, resolve, persist, reload.
# ABOUTME: Uses the real background runner, a real SQLite store, and real WAV files.

from pathlib import Path

from audioshelf.core.controller import LibraryController, LibraryState
from audioshelf.core.discovery import CatalogBuilder
from audioshelf.core.tasks import ThreadTaskRunner
from audioshelf.db.catalog import LibraryStore
from audioshelf.db.connection import open_library
from audioshelf.formats.media import inspect_media


class TestBackgroundDiscovery:
    """Tests for discovery on the background runner against a real database."""

    def test_books_persist_across_connections(self, db_path, store, inspector, book_a_tree):
        with ThreadTaskRunner() as runner:
            builder = CatalogBuilder(store, runner, inspect=inspector)
            assert builder.start_discovery(book_a_tree)
            builder.wait(timeout=10)
        assert not builder.is_working

        conn = open_library(db_path)
        try:
            [book] = LibraryStore(conn).read_all_books()
            linked = conn.execute("SELECT DISTINCT book_id FROM files").fetchall()
        finally:
            conn.close()

        assert book.name == "Chapter 1"
        assert book.folder == str(book_a_tree / "BookA")
        assert book.duration == 1220000
        assert [Path(f.path).name for f in book.files] == ["track1.mp3", "track2.mp3"]
        assert all(f.book_id == book.id for f in book.files)
        assert [tuple(row) for row in linked] == [(book.id,)]

    def test_rescan_appends(self, store, inspector, book_a_tree):
        with ThreadTaskRunner() as runner:
            builder = CatalogBuilder(store, runner, inspect=inspector)
            builder.start_discovery(book_a_tree)
            builder.wait(timeout=10)
            builder.start_discovery(book_a_tree)
            builder.wait(timeout=10)
        assert len(store.read_all_books()) == 2


class TestRealMedia:
    """Tests for discovery over real WAV files probed by mutagen."""

    def test_wav_library(self, store, wav_library: Path):
        with ThreadTaskRunner() as runner:
            builder = CatalogBuilder(store, runner, inspect=inspect_media)
            builder.start_discovery(wav_library)
            builder.wait(timeout=30)

        books = {b.name: b for b in store.read_all_books()}
        assert set(books) == {"First Book", "Second Book"}

        first = books["First Book"]
        assert [Path(f.path).name for f in first.files] == ["01.wav", "02.wav"]
        assert abs(first.duration - 3000) <= 10
        assert abs(books["Second Book"].duration - 1500) <= 10

    def test_controller_drives_scan(self, store, wav_library: Path):
        with ThreadTaskRunner() as runner:
            builder = CatalogBuilder(store, runner, inspect=inspect_media)
            controller = LibraryController(store, builder)
            assert controller.tick() == LibraryState.EMPTY
            controller.request_discovery(wav_library)
            assert controller.tick() == LibraryState.LIBRARY_DISCOVERY
            builder.wait(timeout=30)
            assert controller.tick() == LibraryState.LIBRARY

        assert len(controller.books) == 2
        assert controller.status == "2 book(s) in library"
