"""Configuration stores: where the journal directory comes from.

A store answers single-key lookups. ``resolve_journal_dir`` asks a store
for the journal directory and normalises the answer.
"""

import logging
import os
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jotter.core.config import CONFIG_FILE, JOURNAL_DIR_KEY, get_env

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


class ConfigStore(Protocol):
    """Key-value configuration lookup."""

    def get(self, key: str) -> str | None:
        pass


class JournalConfig(BaseModel):
    """Typed configuration loaded from jotter-config.yaml.

    Keys are the same names used in the environment, so one lookup key
    works against either store. Unknown keys are kept.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    journal_dir: str | None = Field(default=None, alias=JOURNAL_DIR_KEY)

    def lookup(self, key: str) -> str | None:
        if key == JOURNAL_DIR_KEY:
            return self.journal_dir
        value = (self.model_extra or {}).get(key)
        return None if value is None else str(value)


class EnvConfigStore:
    """Looks keys up in the process environment (and .env)."""

    def get(self, key: str) -> str | None:
        return get_env(key)


class YamlConfigStore:
    """Looks keys up in a YAML mapping file.

    Example:
        store = YamlConfigStore("~/.jotter/jotter-config.yaml")
        store.get("JOTTER_JOURNAL_DIR")
    """

    _EMPTY_CONFIG = JournalConfig()

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path or CONFIG_FILE).expanduser()
        self._config: JournalConfig | None = None

    def load(self) -> JournalConfig:
        """Load and cache the config file.

        Raises:
            ConfigError: If the file exists but is not a valid YAML mapping.
        """
        if self._config is not None:
            return self._config

        if not self.path.exists():
            logger.debug(f"No config file at {self.path}")
            self._config = self._EMPTY_CONFIG
            return self._config

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {self.path}: {e}") from e

        if raw is None:
            self._config = self._EMPTY_CONFIG
            return self._config

        if not isinstance(raw, dict):
            raise ConfigError(
                f"{self.path.name} must be a mapping, got {type(raw).__name__}"
            )

        try:
            self._config = JournalConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {self.path}: {e}") from e

        logger.debug(f"Config loaded from {self.path}")
        return self._config

    def get(self, key: str) -> str | None:
        return self.load().lookup(key)


class ChainConfigStore:
    """Asks each store in turn; the first non-empty answer wins."""

    def __init__(self, *stores: ConfigStore):
        self.stores = stores

    def get(self, key: str) -> str | None:
        for store in self.stores:
            value = store.get(key)
            if value:
                return value
        return None


def default_store() -> ConfigStore:
    """Environment first, then the YAML config file."""
    return ChainConfigStore(EnvConfigStore(), YamlConfigStore())


def normalize_dir(value: str) -> Path:
    """Expand ``~`` and drop trailing separators (the root stays the root)."""
    expanded = os.path.expanduser(value.strip())
    trimmed = expanded.rstrip(os.sep) or os.sep
    return Path(trimmed)


def resolve_journal_dir(
    store: ConfigStore | None = None, key: str = JOURNAL_DIR_KEY
) -> Path:
    """
    Resolve the journal directory from configuration.

    Args:
        store: Store to query, defaults to environment then YAML file
        key: Key holding the directory path

    Returns:
        Normalised journal directory path

    Raises:
        ConfigError: If no directory is configured.
    """
    store = store or default_store()
    value = store.get(key)
    if not value or not value.strip():
        raise ConfigError(f"No journal directory configured ({key} is not set)")
    return normalize_dir(value)
