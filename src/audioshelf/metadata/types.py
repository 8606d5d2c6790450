# ABOUTME: Core data structures for the audiobook catalog.
# ABOUTME: Book, MediaFile, Meta, Track, and Bookmark flow between scanning, resolution, and storage.

import enum
from dataclasses import dataclass, field

LAST_POSITION_BOOKMARK = "##last##"


class TrackType(enum.Enum):
    """Kind of elementary stream inside a media file."""

    UNKNOWN = "unknown"
    AUDIO = "audio"
    VIDEO = "video"
    TEXT = "text"


@dataclass(frozen=True)
class Track:
    """One elementary stream reported by the media probe."""

    type: TrackType = TrackType.UNKNOWN


@dataclass
class Meta:
    """Free-text tag fields embedded in a media file. Missing tags are empty strings."""

    author: str = ""
    title: str = ""
    rating: str = ""
    artwork_url: str = ""
    publisher: str = ""
    track_number: str = ""
    description: str = ""


@dataclass
class MediaFile:
    """One physical file contributing audio content to a Book.

    Durations are milliseconds; last_modified is milliseconds since the epoch.
    """

    path: str
    duration: int = 0
    last_modified: int = 0
    track_number: int = 0
    meta: Meta = field(default_factory=Meta)
    tracks: list[Track] = field(default_factory=list)
    is_playlist: bool = False
    book_id: int | None = None
    id: int | None = None


@dataclass
class Book:
    """A logical audiobook: a folder of media files with resolved metadata.

    The id is assigned by the store when the book is first written and never
    changes afterwards. A book with no files is never persisted.
    """

    folder: str
    name: str = ""
    author: str = ""
    series: str = ""
    description: str = ""
    duration: int = 0
    thumbnail: str = ""
    files: list[MediaFile] = field(default_factory=list)
    id: int | None = None

    @property
    def is_empty(self) -> bool:
        """Whether the book has no constituent files."""
        return not self.files


@dataclass
class Bookmark:
    """A saved playback position inside one file of a book."""

    book_id: int
    name: str
    file_id: int | None = None
    position: int = 0
    description: str = ""
    id: int | None = None

    @property
    def is_last_position(self) -> bool:
        """Whether this is the auto-managed last playback position."""
        return self.name == LAST_POSITION_BOOKMARK
