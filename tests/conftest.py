# ABOUTME: Shared pytest fixtures for audioshelf tests.
# ABOUTME: Provides real WAV files, a fake media probe, library stores, and sample audiobook trees.

import wave
from pathlib import Path

import pytest

from audioshelf.db.catalog import LibraryStore
from audioshelf.db.connection import open_library
from audioshelf.formats.media import MediaInfo, MediaReadError
from audioshelf.metadata.types import Meta, Track, TrackType


def write_wav(path: Path, seconds: float = 1.0, rate: int = 8000) -> Path:
    """Write a silent mono 16-bit WAV file of the given length."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(2)
        out.setframerate(rate)
        out.writeframes(b"\x00\x00" * int(rate * seconds))
    return path


class FakeInspector:
    """Media probe keyed by file name. Unknown names fail like unreadable files."""

    def __init__(self, infos: dict[str, MediaInfo] | None = None) -> None:
        self.infos = dict(infos or {})
        self.calls: list[Path] = []

    def add(self, name: str, duration: int = 0, **meta: str) -> None:
        self.infos[name] = MediaInfo(
            duration=duration, tracks=[Track(TrackType.AUDIO)], meta=Meta(**meta)
        )

    def __call__(self, path: Path) -> MediaInfo:
        self.calls.append(path)
        if path.name not in self.infos:
            raise MediaReadError(f"Cannot read {path}")
        return self.infos[path.name]


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a temporary library database."""
    return tmp_path / "library.db"


@pytest.fixture
def store(db_path: Path):
    """A LibraryStore backed by a temporary database."""
    conn = open_library(db_path)
    yield LibraryStore(conn)
    conn.close()


@pytest.fixture
def inspector() -> FakeInspector:
    """An empty fake media probe; tests register file names on it."""
    return FakeInspector()


@pytest.fixture
def book_a_tree(tmp_path: Path, inspector: FakeInspector) -> Path:
    """A library with one two-chapter book and a cover image.

    Layout:
        lib/
            BookA/
                cover.jpg
                track1.mp3   (title "Chapter 1", 600000 ms)
                track2.mp3   (title "Chapter 1", 620000 ms)
    """
    root = tmp_path / "lib"
    book = root / "BookA"
    book.mkdir(parents=True)
    (book / "track1.mp3").write_bytes(b"fake mp3")
    (book / "track2.mp3").write_bytes(b"fake mp3")
    (book / "cover.jpg").write_bytes(b"fake jpg")
    inspector.add("track1.mp3", duration=600000, title="Chapter 1")
    inspector.add("track2.mp3", duration=620000, title="Chapter 1")
    inspector.add("cover.jpg", duration=999)
    return root


@pytest.fixture
def wav_library(tmp_path: Path) -> Path:
    """A library of real WAV files that mutagen can probe.

    Layout:
        audiobooks/
            Author/
                First Book/
                    01.wav (1 s)
                    02.wav (2 s)
                    notes.txt
            Second Book/
                part.wav (1.5 s)
    """
    root = tmp_path / "audiobooks"
    first = root / "Author" / "First Book"
    write_wav(first / "01.wav", 1.0)
    write_wav(first / "02.wav", 2.0)
    (first / "notes.txt").write_text("liner notes")
    write_wav(root / "Second Book" / "part.wav", 1.5)
    return root


@pytest.fixture
def make_wav():
    """Factory writing silent WAV files: make_wav(path, seconds=1.0)."""
    return write_wav
