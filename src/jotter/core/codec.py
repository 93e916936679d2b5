"""Filename codec: maps filesystem paths to typed records and back.

A journal entry's type lives in its extension and its position in the
document lives in its title, so decoding never has to open the file:

    <directory>/<title>.<extension>

The directory is everything before the last path delimiter (the current
directory for a bare basename) and the title is everything before the last
``.`` of the basename. Titles may therefore contain dots, but never the
path delimiter.
"""

import os
from pathlib import PurePath

from jotter.core.types import Record, RecordKind

EXTENSION_KINDS: dict[str, RecordKind] = {
    "h1": RecordKind.HEADING,
    "item": RecordKind.ITEM,
    "link": RecordKind.LINK,
    "png": RecordKind.IMAGE,
    "jpg": RecordKind.IMAGE,
    "code": RecordKind.RAW_HTML,
}

# Preferred extension when writing a record of a given kind
KIND_EXTENSIONS: dict[RecordKind, str] = {
    RecordKind.HEADING: "h1",
    RecordKind.ITEM: "item",
    RecordKind.LINK: "link",
    RecordKind.IMAGE: "png",
    RecordKind.RAW_HTML: "code",
}


def kind_for_extension(extension: str) -> RecordKind | None:
    """Return the record kind for an extension, or None if unrecognized."""
    return EXTENSION_KINDS.get(extension)


def extension_for_kind(kind: RecordKind) -> str:
    return KIND_EXTENSIONS[kind]


def decode_path(path: str | PurePath) -> Record | None:
    """
    Decode a path into a record without reading the file.

    Args:
        path: Filesystem path of a candidate entry

    Returns:
        Record with no content, or None when the basename has no extension,
        an empty title, or an extension that is not a recognized entry type.
    """
    directory, sep, basename = os.fspath(path).rpartition(os.sep)
    if not sep:
        directory = os.curdir
    title, dot, extension = basename.rpartition(".")
    if not dot or not title:
        return None

    kind = kind_for_extension(extension)
    if kind is None:
        return None

    return Record(directory=directory, title=title, extension=extension, kind=kind)


def encode_path(
    directory: str | PurePath, title: str, kind: RecordKind | str
) -> str:
    """
    Build the path for a record.

    Args:
        directory: Containing directory ("" is the filesystem root)
        title: Record title, must not contain the path delimiter
        kind: RecordKind, or an explicit extension such as "jpg"

    Raises:
        ValueError: If the title is empty or contains the path delimiter,
            or the extension is not a recognized entry type.
    """
    if not title or os.sep in title:
        raise ValueError(f"Invalid record title: {title!r}")

    if isinstance(kind, RecordKind):
        extension = extension_for_kind(kind)
    else:
        extension = kind
        if kind_for_extension(extension) is None:
            raise ValueError(f"Unrecognized entry extension: {extension!r}")

    return Record(
        directory=os.fspath(directory),
        title=title,
        extension=extension,
        kind=EXTENSION_KINDS[extension],
    ).path


def sort_key(path: str | PurePath) -> bytes:
    """Composite ordering key: the full path compared byte-wise."""
    return os.fsencode(path)
