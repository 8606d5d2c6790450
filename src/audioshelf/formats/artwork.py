# ABOUTME: Embedded cover art extraction and thumbnail reference resolution.
# ABOUTME: Caches pictures under content-hash file names and decodes file:// URIs back to paths.

import base64
import hashlib
import logging
import struct
from pathlib import Path
from urllib.parse import unquote, urlparse

from mutagen.flac import Picture
from mutagen.mp4 import MP4Cover

logger = logging.getLogger(__name__)

_MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
}


def find_embedded_picture(audio) -> tuple[bytes, str] | None:
    """Return (data, mime) of the first picture embedded in a mutagen file.

    Understands ID3 APIC frames, MP4 covr atoms, FLAC picture blocks, and
    base64 METADATA_BLOCK_PICTURE comments used by Ogg files.
    """
    pictures = getattr(audio, "pictures", None)
    if pictures:
        return pictures[0].data, pictures[0].mime

    tags = getattr(audio, "tags", None)
    if not tags:
        return None

    if hasattr(tags, "getall"):
        frames = tags.getall("APIC")
        if frames:
            return frames[0].data, frames[0].mime
        return None

    covers = tags.get("covr")
    if covers:
        cover = covers[0]
        mime = "image/png" if cover.imageformat == MP4Cover.FORMAT_PNG else "image/jpeg"
        return bytes(cover), mime

    blocks = tags.get("metadata_block_picture")
    if blocks:
        try:
            picture = Picture(base64.b64decode(blocks[0]))
        except (ValueError, TypeError, struct.error) as exc:
            logger.debug("Ignoring malformed embedded picture: %s", exc)
            return None
        return picture.data, picture.mime

    return None


def cache_artwork(data: bytes, mime: str, artwork_dir: Path) -> str:
    """Write picture bytes into the artwork cache and return their file:// URI.

    Files are named by the SHA-256 of their content, so identical covers
    shared by every track of a book are stored once.
    """
    digest = hashlib.sha256(data).hexdigest()
    target = artwork_dir / f"{digest}{_MIME_EXTENSIONS.get(mime.lower(), '.img')}"
    if not target.exists():
        artwork_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return target.resolve().as_uri()


def thumbnail_path(reference: str) -> Path | None:
    """Resolve a stored thumbnail reference to a local file path.

    Accepts file:// URIs (percent-encoded) and plain paths. Returns None for
    an empty reference or any other URI scheme.
    """
    if not reference:
        return None
    parsed = urlparse(reference)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    # Single-letter schemes are Windows drive letters, not URIs
    if len(parsed.scheme) > 1:
        return None
    return Path(reference)
