"""Journal repository: the directory scan behind the record stream.

Traversal lives here and decoding lives in ``jotter.core.codec``; this
module only lists files, hands their paths to the codec and loads content
for the records that decode.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from jotter.core.codec import decode_path
from jotter.core.types import Record, RecordKind

logger = logging.getLogger(__name__)

# Round-trips arbitrary bytes so raw HTML is emitted unmodified
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def _iter_files(root: Path, recursive: bool) -> Iterator[Path]:
    pattern = "**/*" if recursive else "*"
    for path in root.glob(pattern):
        if path.is_file():
            yield path


def read_content(path: Path | str) -> str:
    """Read an entry file as text, preserving bytes and line endings."""
    return Path(path).read_bytes().decode(ENCODING, ENCODING_ERRORS)


def list_records(directory: Path | str, recursive: bool = False) -> list[Record]:
    """
    List the typed records stored in a directory, in document order.

    Files whose names do not decode are skipped silently, since the journal
    may share its directory with unrelated files. A file that decodes but
    cannot be read is logged and skipped.

    Args:
        directory: Journal directory
        recursive: Also descend into subdirectories

    Returns:
        Records with content loaded, sorted byte-wise by absolute path
    """
    # Absolute so the order does not depend on how the root was spelled
    root = Path(directory).absolute()
    records: list[Record] = []

    for path in _iter_files(root, recursive):
        record = decode_path(os.fspath(path))
        if record is None:
            logger.debug(f"Skipping {path.name}: not a journal entry")
            continue

        if record.kind is RecordKind.IMAGE:
            records.append(record)
            continue

        try:
            content = read_content(path)
        except OSError as e:
            logger.warning(f"Skipping unreadable entry {path}: {e}")
            continue
        records.append(record.with_content(content))

    records.sort(key=lambda r: r.sort_key)
    logger.debug(f"Found {len(records)} records in {root}")
    return records
