"""Document assembler: turns a journal directory into one HTML document.

Records are rendered in sorted order. Adjacent ``item`` and ``link``
records share a single ``<ul>``; every other kind stands alone. Grouping is
a left fold over the records carrying a two-state ``ListState``, so it
depends only on kind adjacency and never looks ahead.
"""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from functools import reduce
from pathlib import Path

from jotter.core.config import INDEX_FILENAME
from jotter.core.renderers import escape_html, render_record
from jotter.core.repository import ENCODING, ENCODING_ERRORS, list_records
from jotter.core.types import LIST_KINDS, ListState, Record, RecordKind

logger = logging.getLogger(__name__)

LIST_OPEN = "<ul>"
LIST_CLOSE = "</ul>"

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


class AssemblyError(Exception):
    """Raised when a journal directory cannot be assembled into a document."""

    pass


class EmptyDocumentError(AssemblyError):
    """Raised when there is nothing to show."""

    pass


class DocumentWriteError(AssemblyError):
    """Raised when the assembled document cannot be written."""

    pass


@dataclass(frozen=True)
class AssemblyResult:
    """Outcome of a successful assembly run."""

    path: Path
    record_count: int
    html: str


def transition(state: ListState, kind: RecordKind) -> tuple[ListState, list[str]]:
    """
    Advance the list state machine by one record.

    Args:
        state: Current state
        kind: Kind of the record about to be emitted

    Returns:
        (new_state, tags) - tags to emit before the record's fragment
    """
    if kind in LIST_KINDS:
        if state is ListState.OUTSIDE:
            return ListState.INSIDE, [LIST_OPEN]
        return state, []

    if state is ListState.INSIDE:
        return ListState.OUTSIDE, [LIST_CLOSE]
    return state, []


def group_fragments(
    records: list[Record], base_dir: Path | str | None = None
) -> list[str]:
    """
    Render records in order, wrapping adjacent list members in one list.

    Args:
        records: Sorted records with content loaded
        base_dir: Directory image paths are made relative to

    Returns:
        Non-empty fragments and list tags, in document order
    """

    def step(
        acc: tuple[ListState, list[str]], record: Record
    ) -> tuple[ListState, list[str]]:
        state, parts = acc
        state, tags = transition(state, record.kind)
        parts.extend(tags)

        image_src = None
        if record.kind is RecordKind.IMAGE and base_dir is not None:
            image_src = os.path.relpath(record.path, base_dir)

        fragment = render_record(record, image_src=image_src)
        if fragment:
            parts.append(fragment)
        return state, parts

    state, parts = reduce(step, records, (ListState.OUTSIDE, []))
    if state is ListState.INSIDE:
        parts.append(LIST_CLOSE)
    return parts


def render_document(fragments: list[str], title: str) -> str:
    """Wrap fragments in the minimal head/body document."""
    return DOCUMENT_TEMPLATE.format(
        title=escape_html(title), body="\n".join(fragments)
    )


def _document_mode(path: Path) -> int:
    """Mode of the document being replaced, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomically(path: Path, html: str) -> None:
    mode = _document_mode(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(html.encode(ENCODING, ENCODING_ERRORS))
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def assemble(
    directory: Path | str,
    output_name: str = INDEX_FILENAME,
    recursive: bool = False,
) -> AssemblyResult:
    """
    Assemble every journal entry in a directory into one HTML document.

    The document is generated in full before anything is written and then
    replaces any previous document in a single rename.

    Args:
        directory: Journal directory
        output_name: Filename of the document inside the directory
        recursive: Include entries in subdirectories

    Returns:
        AssemblyResult describing the written document

    Raises:
        EmptyDocumentError: If no entry produced any output (list tags on
            their own do not count); nothing is written.
        DocumentWriteError: If the document could not be written.
    """
    root = Path(directory)
    records = list_records(root, recursive=recursive)
    fragments = group_fragments(records, base_dir=root)

    if not any(f.strip() for f in fragments if f not in (LIST_OPEN, LIST_CLOSE)):
        logger.info(f"Nothing to assemble in {root} ({len(records)} records)")
        raise EmptyDocumentError(f"No journal entries to show in {root}")

    title = root.resolve().name or str(root)
    html = render_document(fragments, title)
    output = root / output_name

    try:
        _write_atomically(output, html)
    except OSError as e:
        logger.error(f"Failed to write {output}: {e}")
        raise DocumentWriteError(f"Failed to write {output}: {e}") from e

    logger.info(f"Assembled {len(records)} records into {output}")
    return AssemblyResult(path=output, record_count=len(records), html=html)
