# ABOUTME: Exception types raised by the audioshelf library database layer.
# ABOUTME: Separates fatal storage faults from recoverable per-book write failures.


class LibraryError(Exception):
    """Base class for library database failures."""


class LibraryUnavailableError(LibraryError):
    """Raised when the database cannot be opened or its tables cannot be created."""


class BookWriteError(LibraryError):
    """Raised when a book's rows could not be written. The transaction was rolled back."""
