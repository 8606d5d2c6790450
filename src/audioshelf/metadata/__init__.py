# ABOUTME: Metadata package for audiobook catalog data structures and resolution.
# ABOUTME: Exports the Book/MediaFile model and the book-level metadata resolver.

from audioshelf.metadata.resolver import resolve_book_info
from audioshelf.metadata.types import (
    LAST_POSITION_BOOKMARK,
    Book,
    Bookmark,
    MediaFile,
    Meta,
    Track,
    TrackType,
)

__all__ = [
    "LAST_POSITION_BOOKMARK",
    "Book",
    "Bookmark",
    "MediaFile",
    "Meta",
    "Track",
    "TrackType",
    "resolve_book_info",
]
