# ABOUTME: Book-level metadata resolution from the tags of its constituent files.
# ABOUTME: Decides title, author, thumbnail, and total duration for a scanned book.

from pathlib import Path

from audioshelf.metadata.types import Book


def _first_non_empty(values) -> str:
    """Return the first non-empty string from an iterable, or ''."""
    for value in values:
        if value:
            return value
    return ""


def resolve_book_info(book: Book) -> Book:
    """Fill in a book's descriptive fields from its files' Meta records.

    Precedence, each step only touching a field that is still empty:
    1. Two or more files whose first two titles are identical: that title
       replaces the folder-derived name.
    2. First non-empty file title.
    3. First non-empty file author.
    4. The folder's base name.
    5. First non-empty artwork reference as thumbnail. There is no fallback
       to a loose image file inside the folder.

    Duration is always recomputed as the sum of the file durations.

    Args:
        book: The book to resolve. Modified in place.

    Returns:
        The same book, for chaining.
    """
    files = book.files

    if book.name and len(files) > 1 and files[0].meta.title == files[1].meta.title:
        book.name = files[0].meta.title

    if not book.name:
        book.name = _first_non_empty(f.meta.title for f in files)

    if not book.author:
        book.author = _first_non_empty(f.meta.author for f in files)

    if not book.name:
        book.name = Path(book.folder).name

    if not book.thumbnail:
        book.thumbnail = _first_non_empty(f.meta.artwork_url for f in files)

    book.duration = sum(f.duration for f in files)
    return book
