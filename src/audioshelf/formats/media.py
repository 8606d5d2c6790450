# ABOUTME: Media file probing using mutagen: duration, stream list, and tag metadata.
# ABOUTME: Playlists are read as text; unreadable files raise MediaReadError.

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from mutagen import File as MutagenFile

from audioshelf.formats.artwork import cache_artwork, find_embedded_picture
from audioshelf.metadata.types import Meta, Track, TrackType

logger = logging.getLogger(__name__)

PLAYLIST_EXTENSIONS: frozenset[str] = frozenset({".m3u", ".m3u8"})

_PLAYLIST_TITLE_DIRECTIVE = "#PLAYLIST:"


class MediaReadError(Exception):
    """Raised when a media file cannot be opened or recognized."""


@dataclass
class MediaInfo:
    """What the probe learned about one media file. Duration is in milliseconds."""

    duration: int = 0
    tracks: list[Track] = field(default_factory=list)
    meta: Meta = field(default_factory=Meta)


# Type for a probe: takes a file path -> MediaInfo, raising MediaReadError
InspectFn = Callable[[Path], MediaInfo]


def _first_tag(audio, keys: list[str]) -> str:
    """Return the first non-empty value among the given easy-tag keys, or ''."""
    tags = audio.tags
    if not tags:
        return ""
    for key in keys:
        values = tags.get(key)
        if not values:
            continue
        value = values[0] if isinstance(values, list) else values
        text = str(value).strip()
        if text:
            return text
    return ""


def _read_meta(audio) -> Meta:
    """Map easy tags onto a Meta record."""
    return Meta(
        author=_first_tag(audio, ["artist", "albumartist", "author"]),
        title=_first_tag(audio, ["title"]),
        rating=_first_tag(audio, ["rating"]),
        publisher=_first_tag(audio, ["organization", "publisher", "label"]),
        track_number=_first_tag(audio, ["tracknumber"]),
        description=_first_tag(audio, ["description", "comment"]),
    )


def _read_tracks(audio) -> list[Track]:
    """Describe the streams of a file. mutagen reports one stream per file."""
    info = getattr(audio, "info", None)
    if info is None:
        return []
    if getattr(info, "channels", 0) or getattr(info, "sample_rate", 0):
        return [Track(TrackType.AUDIO)]
    return [Track(TrackType.UNKNOWN)]


def _read_artwork(path: Path, artwork_dir: Path) -> str:
    """Extract embedded cover art into the cache, returning its URI or ''."""
    try:
        audio = MutagenFile(path)
    except Exception as exc:  # mutagen raises many error types on malformed input
        logger.debug("Cannot read artwork from %s: %s", path, exc)
        return ""
    if audio is None:
        return ""
    picture = find_embedded_picture(audio)
    if picture is None:
        return ""
    data, mime = picture
    try:
        return cache_artwork(data, mime, artwork_dir)
    except OSError as exc:
        logger.warning("Cannot write artwork for %s: %s", path, exc)
        return ""


def read_playlist_info(path: Path) -> MediaInfo:
    """Probe an M3U playlist. Its title comes from a #PLAYLIST: directive.

    Playlists contribute no duration of their own; the files they reference
    are cataloged individually.

    Raises:
        MediaReadError: If the playlist cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MediaReadError(f"Cannot read playlist {path}: {exc}") from exc

    title = ""
    for line in text.splitlines():
        line = line.strip().lstrip("\ufeff")
        if line.startswith(_PLAYLIST_TITLE_DIRECTIVE):
            title = line[len(_PLAYLIST_TITLE_DIRECTIVE):].strip()
            break

    return MediaInfo(duration=0, tracks=[], meta=Meta(title=title))


def inspect_media(path: Path, artwork_dir: Path | None = None) -> MediaInfo:
    """Probe a media file for duration, streams, and tags.

    Args:
        path: The file to probe.
        artwork_dir: When given, embedded cover art is cached here and
            referenced from meta.artwork_url as a file:// URI.

    Returns:
        A MediaInfo for the file.

    Raises:
        MediaReadError: If the file cannot be opened or is not a recognized
            media format.
    """
    if path.suffix.lower() in PLAYLIST_EXTENSIONS:
        return read_playlist_info(path)

    try:
        audio = MutagenFile(path, easy=True)
    except Exception as exc:  # mutagen raises many error types on malformed input
        raise MediaReadError(f"Cannot read {path}: {exc}") from exc

    if audio is None:
        raise MediaReadError(f"Unrecognized media format: {path}")

    length = getattr(getattr(audio, "info", None), "length", 0) or 0
    meta = _read_meta(audio)
    if artwork_dir is not None:
        meta.artwork_url = _read_artwork(path, artwork_dir)

    return MediaInfo(
        duration=int(round(length * 1000)),
        tracks=_read_tracks(audio),
        meta=meta,
    )
