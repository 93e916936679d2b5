"""Writing new journal entries.

Content acquisition (an editor session, a screenshot) happens outside;
these helpers take the finished content, allocate a stem and write the
file the codec will later decode.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from jotter.core.allocator import allocate_stem
from jotter.core.codec import encode_path, extension_for_kind, kind_for_extension
from jotter.core.repository import ENCODING, ENCODING_ERRORS
from jotter.core.types import RecordKind

logger = logging.getLogger(__name__)


class EntryError(Exception):
    """Raised when an entry cannot be created."""

    pass


def _entry_path(directory: Path, kind: RecordKind | str, now: datetime | None) -> Path:
    stem = allocate_stem(directory, now=now)
    return Path(encode_path(directory, stem, kind))


def write_entry(
    directory: Path | str,
    kind: RecordKind,
    content: str,
    now: datetime | None = None,
) -> Path:
    """
    Write a text entry under a freshly allocated stem.

    Args:
        directory: Journal directory (created if missing)
        kind: Kind of entry; images go through write_image_entry
        content: Entry text
        now: Moment used for the stem, defaults to the current time

    Returns:
        Path of the new entry

    Raises:
        EntryError: If the content is blank or the kind needs a file.
    """
    if kind is RecordKind.IMAGE:
        raise EntryError("Image entries are copied from a file, not written as text")
    if not content.strip():
        raise EntryError(f"Refusing to write an empty {kind} entry")

    root = Path(directory)
    root.mkdir(parents=True, exist_ok=True)
    path = _entry_path(root, kind, now)
    path.write_bytes(content.encode(ENCODING, ENCODING_ERRORS))
    logger.info(f"Wrote {kind} entry {path.name}")
    return path


def format_link(href: str, text: str) -> str:
    return f"HREF={href.strip()}\nTEXT={' '.join(text.split())}\n"


def write_link_entry(
    directory: Path | str, href: str, text: str, now: datetime | None = None
) -> Path:
    """Write a link entry holding HREF and TEXT lines."""
    if not text.strip():
        raise EntryError("A link entry needs TEXT")
    return write_entry(directory, RecordKind.LINK, format_link(href, text), now=now)


def write_image_entry(
    directory: Path | str, source: Path | str, now: datetime | None = None
) -> Path:
    """
    Copy an existing image into the journal under a new stem.

    Args:
        directory: Journal directory (created if missing)
        source: PNG or JPG file to copy
        now: Moment used for the stem

    Raises:
        EntryError: If the source is missing or not a supported image.
    """
    src = Path(source)
    extension = src.suffix.lstrip(".")
    if kind_for_extension(extension) is not RecordKind.IMAGE:
        raise EntryError(
            f"Unsupported image type {src.suffix or '(none)'}; "
            f"use .{extension_for_kind(RecordKind.IMAGE)} or .jpg"
        )
    if not src.is_file():
        raise EntryError(f"Image not found: {src}")

    root = Path(directory)
    root.mkdir(parents=True, exist_ok=True)
    path = _entry_path(root, extension, now)
    shutil.copyfile(src, path)
    logger.info(f"Copied image {src.name} to {path.name}")
    return path
