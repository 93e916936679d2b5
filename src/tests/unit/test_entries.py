"""Tests for jotter.core.entries module."""

import pytest

from jotter.core.codec import decode_path
from jotter.core.entries import (
    EntryError,
    format_link,
    write_entry,
    write_image_entry,
    write_link_entry,
)
from jotter.core.renderers import render_link
from jotter.core.types import RecordKind

STEM = "entry-20261018-093000UTC"


class TestWriteEntry:
    """Tests for write_entry()."""

    @pytest.mark.parametrize(
        "kind,extension",
        [
            (RecordKind.HEADING, "h1"),
            (RecordKind.ITEM, "item"),
            (RecordKind.RAW_HTML, "code"),
        ],
    )
    def test_writes_under_allocated_stem(self, journal_dir, fixed_now, kind, extension):
        """The file name is stem + kind extension and decodes back to the kind."""
        path = write_entry(journal_dir, kind, "content", now=fixed_now)

        assert path.name == f"{STEM}-50.{extension}"
        assert path.read_text() == "content"
        assert decode_path(str(path)).kind is kind

    def test_successive_entries_count_up(self, journal_dir, fixed_now):
        """Entries in the same second get increasing counters."""
        names = [
            write_entry(journal_dir, RecordKind.ITEM, f"n{i}", now=fixed_now).name
            for i in range(3)
        ]

        assert names == [f"{STEM}-50.item", f"{STEM}-51.item", f"{STEM}-52.item"]

    def test_creates_directory(self, tmp_path, fixed_now):
        """A missing journal directory is created."""
        target = tmp_path / "new" / "journal"

        path = write_entry(target, RecordKind.ITEM, "x", now=fixed_now)

        assert path.exists()

    def test_blank_content_rejected(self, journal_dir):
        """Blank entries are refused."""
        with pytest.raises(EntryError, match="empty"):
            write_entry(journal_dir, RecordKind.HEADING, "  \n ")

    def test_image_kind_rejected(self, journal_dir):
        """Images are copied, not written."""
        with pytest.raises(EntryError, match="copied"):
            write_entry(journal_dir, RecordKind.IMAGE, "not pixels")


class TestWriteLinkEntry:
    """Tests for write_link_entry()."""

    def test_round_trips_through_renderer(self, journal_dir, fixed_now):
        """A written link renders as the same anchor."""
        path = write_link_entry(
            journal_dir, "https://example.com", "Example\n Site", now=fixed_now
        )

        assert path.suffix == ".link"
        assert path.read_text() == "HREF=https://example.com\nTEXT=Example Site\n"
        assert render_link(path.read_text()) == (
            '<li><a href="https://example.com" target="_blank">Example Site</a></li>'
        )

    def test_requires_text(self, journal_dir):
        """A link without text would render to nothing."""
        with pytest.raises(EntryError, match="TEXT"):
            write_link_entry(journal_dir, "https://example.com", " ")

    def test_format_link(self):
        """Links are stored as KEY=value lines."""
        assert format_link(" /a ", "b") == "HREF=/a\nTEXT=b\n"


class TestWriteImageEntry:
    """Tests for write_image_entry()."""

    @pytest.mark.parametrize("suffix", [".png", ".jpg"])
    def test_copies_image(self, journal_dir, tmp_path, fixed_now, suffix):
        """The image is copied under a new stem, keeping its extension."""
        source = tmp_path / f"screenshot{suffix}"
        source.write_bytes(b"\x89PNG-ish")

        path = write_image_entry(journal_dir, source, now=fixed_now)

        assert path.name == f"{STEM}-50{suffix}"
        assert path.read_bytes() == b"\x89PNG-ish"
        assert source.exists()

    @pytest.mark.parametrize("name", ["photo.gif", "photo.jpeg", "photo"])
    def test_unsupported_type(self, journal_dir, tmp_path, name):
        """Only png and jpg are journal images."""
        source = tmp_path / name
        source.write_bytes(b"x")

        with pytest.raises(EntryError, match="Unsupported image type"):
            write_image_entry(journal_dir, source)

    def test_missing_source(self, journal_dir, tmp_path):
        """A source that does not exist is reported."""
        with pytest.raises(EntryError, match="not found"):
            write_image_entry(journal_dir, tmp_path / "gone.png")
