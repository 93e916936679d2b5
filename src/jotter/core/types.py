"""Shared types and data structures for jotter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, StrEnum

__all__ = [
    "LIST_KINDS",
    "ListState",
    "Record",
    "RecordKind",
]


class RecordKind(StrEnum):
    """Kind of a journal record, derived from its file extension."""

    HEADING = "heading"
    ITEM = "item"
    LINK = "link"
    IMAGE = "image"
    RAW_HTML = "rawHtml"
    # `.code` files hold raw HTML snippets
    CODE = "rawHtml"


LIST_KINDS = frozenset({RecordKind.ITEM, RecordKind.LINK})


class ListState(Enum):
    """Whether the assembler is currently inside a list container."""

    OUTSIDE = "outside"
    INSIDE = "inside"


@dataclass(frozen=True)
class Record:
    """One journal entry decoded from a filename.

    ``content`` is the decoded file text, or None when it has not been
    loaded (images are never loaded).
    """

    directory: str
    title: str
    extension: str
    kind: RecordKind
    content: str | None = None

    @property
    def basename(self) -> str:
        return f"{self.title}.{self.extension}"

    @property
    def path(self) -> str:
        """Rebuild the exact filesystem path the record was decoded from."""
        return f"{self.directory}{os.sep}{self.basename}"

    @property
    def sort_key(self) -> bytes:
        return os.fsencode(self.path)

    def with_content(self, content: str | None) -> Record:
        return Record(
            directory=self.directory,
            title=self.title,
            extension=self.extension,
            kind=self.kind,
            content=content,
        )
