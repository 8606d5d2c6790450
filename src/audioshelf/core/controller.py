# ABOUTME: Application state flow for the library: empty, discovering, browsing, and playing.
# ABOUTME: Polled once per UI frame; observes the discovery working flag to leave the scan state.

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from audioshelf.core.state_machine import StateMachineWithContext
from audioshelf.db.catalog import SETTING_LAST_BOOK_ID
from audioshelf.metadata.types import Book

if TYPE_CHECKING:
    from audioshelf.core.discovery import CatalogBuilder
    from audioshelf.db.catalog import LibraryStore

logger = logging.getLogger(__name__)

STATUS_INITIALIZED = "Initialized..."
STATUS_EMPTY = "Choose library location"
STATUS_SEARCHING = "Searching books..."


class LibraryState(enum.Enum):
    INITIALIZED = "initialized"
    EMPTY = "empty"
    LIBRARY_DISCOVERY = "library_discovery"
    LIBRARY = "library"
    PLAYER = "player"


@dataclass
class LibraryContext:
    """Mutable state shared by every state callback."""

    store: LibraryStore
    builder: CatalogBuilder
    status: str = STATUS_INITIALIZED
    books: list[Book] = field(default_factory=list)
    current_book: Book | None = None
    pending_root: Path | None = None
    pending_book_id: int | None = None


def _stay(ctx: LibraryContext) -> None:
    return None


def _start_pending_discovery(ctx: LibraryContext) -> LibraryState | None:
    if ctx.pending_root is None:
        return None
    root, ctx.pending_root = ctx.pending_root, None
    if ctx.builder.start_discovery(root):
        return LibraryState.LIBRARY_DISCOVERY
    return None


def _tick_initialized(ctx: LibraryContext) -> LibraryState:
    if not ctx.books:
        return LibraryState.EMPTY
    if ctx.current_book is not None:
        return LibraryState.PLAYER
    return LibraryState.LIBRARY


def _enter_empty(ctx: LibraryContext) -> None:
    ctx.status = STATUS_EMPTY


def _enter_discovery(ctx: LibraryContext) -> None:
    ctx.status = STATUS_SEARCHING


def _tick_discovery(ctx: LibraryContext) -> LibraryState | None:
    if ctx.builder.is_working:
        return None
    return LibraryState.LIBRARY


def _leave_discovery(ctx: LibraryContext) -> None:
    ctx.books = ctx.store.read_all_books()


def _enter_library(ctx: LibraryContext) -> LibraryState | None:
    ctx.status = f"{len(ctx.books)} book(s) in library"
    if not ctx.books:
        return LibraryState.EMPTY
    return None


def _tick_library(ctx: LibraryContext) -> LibraryState | None:
    target = _start_pending_discovery(ctx)
    if target is not None:
        return target
    if ctx.pending_book_id is not None:
        book_id, ctx.pending_book_id = ctx.pending_book_id, None
        book = next((b for b in ctx.books if b.id == book_id), None)
        if book is None:
            logger.warning("Book %s is not in the library", book_id)
            return None
        ctx.current_book = book
        return LibraryState.PLAYER
    return None


def _enter_player(ctx: LibraryContext) -> None:
    book = ctx.current_book
    if book is None:
        return None
    ctx.store.set_setting(SETTING_LAST_BOOK_ID, str(book.id))
    ctx.status = f"Selected: {book.name}"


def _tick_player(ctx: LibraryContext) -> LibraryState | None:
    if ctx.current_book is None or ctx.pending_root is not None:
        return LibraryState.LIBRARY
    return None


class LibraryController:
    """Owns the library state machine and the context it runs on."""

    def __init__(self, store: LibraryStore, builder: CatalogBuilder) -> None:
        self._context = LibraryContext(store=store, builder=builder)
        self._machine: StateMachineWithContext[LibraryState] = StateMachineWithContext(
            self._context, LibraryState.INITIALIZED, _stay, _tick_initialized, _stay,
        )
        self._machine.add_state(LibraryState.EMPTY, _enter_empty, _start_pending_discovery, _stay)
        self._machine.add_state(
            LibraryState.LIBRARY_DISCOVERY, _enter_discovery, _tick_discovery, _leave_discovery,
        )
        self._machine.add_state(LibraryState.LIBRARY, _enter_library, _tick_library, _stay)
        self._machine.add_state(LibraryState.PLAYER, _enter_player, _tick_player, _stay)

        self._context.books = store.read_all_books()
        self._context.current_book = self._restore_last_book()

    def _restore_last_book(self) -> Book | None:
        value = self._context.store.get_setting(SETTING_LAST_BOOK_ID)
        if not value or not value.isdigit():
            return None
        book_id = int(value)
        return next((b for b in self._context.books if b.id == book_id), None)

    @property
    def state(self) -> LibraryState:
        return self._machine.current_state

    @property
    def status(self) -> str:
        return self._context.status

    @property
    def discovery_pending(self) -> bool:
        """Whether a requested scan has not been picked up yet."""
        return self._context.pending_root is not None

    @property
    def books(self) -> list[Book]:
        return self._context.books

    @property
    def current_book(self) -> Book | None:
        return self._context.current_book

    def tick(self) -> LibraryState:
        """Advance the state machine once and return the resulting state."""
        self._machine.tick()
        return self._machine.current_state

    def request_discovery(self, root: Path | str) -> None:
        """Ask for a library scan of root; picked up on the next tick."""
        self._context.pending_root = Path(root)

    def select_book(self, book_id: int) -> None:
        """Ask to open a book; picked up on the next tick in the library state."""
        self._context.pending_book_id = book_id

    def close_book(self) -> None:
        """Drop the current selection; the player state returns to the library."""
        self._context.current_book = None
