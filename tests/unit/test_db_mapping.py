# ABOUTME: Unit tests for row mapping and track-number coercion.
# ABOUTME: Validates conversions between dataclasses and database row dicts.

import pytest

from audioshelf.db.mapping import book_to_row, media_to_row, parse_track_number
from audioshelf.metadata.types import Book, MediaFile, Meta


class TestParseTrackNumber:
    """Tests for parse_track_number()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("7", 7), ("3/12", 3), (" 04 ", 4), ("", 0), (None, 0), ("abc", 0), ("side A", 0)],
    )
    def test_parse(self, text, expected) -> None:
        assert parse_track_number(text) == expected


class TestRows:
    """Tests for dataclass to row conversion."""

    def test_book_to_row(self) -> None:
        book = Book(folder="/lib/Dune", name="Dune", author="Herbert", duration=10)
        row = book_to_row(book)
        assert row["folder"] == "/lib/Dune"
        assert row["name"] == "Dune"
        assert row["duration"] == 10
        assert "id" not in row

    def test_media_row_empty_track_text_is_zero(self) -> None:
        media = MediaFile(path="/a.mp3", meta=Meta(track_number=""))
        assert media_to_row(media, book_id=3)["track_number"] == 0

    def test_media_row_bad_track_text_is_zero(self) -> None:
        media = MediaFile(path="/a.mp3", track_number=9, meta=Meta(track_number="n/a"))
        assert media_to_row(media, book_id=3)["track_number"] == 0

    def test_media_row_binds_book_id(self) -> None:
        media = MediaFile(path="/a.m3u", is_playlist=True, last_modified=123)
        row = media_to_row(media, book_id=42)
        assert row["book_id"] == 42
        assert row["is_playlist"] == 1
        assert row["last_modified"] == 123
