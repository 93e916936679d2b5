"""jotter core library - the record store and document assembler."""

from jotter.core.allocator import allocate_stem
from jotter.core.assembler import (
    AssemblyError,
    AssemblyResult,
    DocumentWriteError,
    EmptyDocumentError,
    assemble,
)
from jotter.core.codec import decode_path, encode_path
from jotter.core.repository import list_records
from jotter.core.types import ListState, Record, RecordKind

__all__ = [
    # Operations
    "allocate_stem",
    "assemble",
    "decode_path",
    "encode_path",
    "list_records",
    # Types
    "ListState",
    "Record",
    "RecordKind",
    "AssemblyResult",
    # Errors
    "AssemblyError",
    "DocumentWriteError",
    "EmptyDocumentError",
]
