"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest


@pytest.fixture
def journal_dir(tmp_path):
    """Provide an empty journal directory."""
    path = tmp_path / "journal"
    path.mkdir()
    return path


@pytest.fixture
def fixed_now():
    """A fixed UTC moment for stem allocation."""
    return datetime(2026, 10, 18, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    """Isolate jotter configuration from the real environment."""
    env_vars = {
        "LOG_LEVEL": "DEBUG",
        "JOTTER_NOTIFY": "false",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("JOTTER_JOURNAL_DIR", raising=False)
    monkeypatch.setattr(
        "jotter.core.settings.CONFIG_FILE", tmp_path / "missing-config.yaml"
    )
    return env_vars


@pytest.fixture
def make_entry(journal_dir):
    """Factory writing an entry file into the journal directory."""

    def _make_entry(name: str, content: str | bytes = "") -> Path:
        path = journal_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _make_entry
