"""Configuration management for jotter core."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    value = os.getenv(key)
    if value is None:
        if default is not None:
            logger.debug(f"{key} not set, falling back to default value")
        return default
    return value


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# Fixed literal at the start of every allocated stem
STEM_PREFIX = "entry"

# Assembled document, written inside the journal directory
INDEX_FILENAME = "index.html"

# Key looked up in the configuration store for the journal directory
JOURNAL_DIR_KEY = "JOTTER_JOURNAL_DIR"

# jotter data directory (defaults to ~/.jotter)
JOTTER_DATA_DIR = Path(
    get_env("JOTTER_DATA_DIR", os.path.expanduser("~/.jotter"))
    or os.path.expanduser("~/.jotter")
)

CONFIG_FILE = Path(
    get_env("JOTTER_CONFIG_FILE", str(JOTTER_DATA_DIR / "jotter-config.yaml"))
    or JOTTER_DATA_DIR / "jotter-config.yaml"
).expanduser()

# Notifications
NOTIFY_ENABLED = get_env_bool("JOTTER_NOTIFY", False)
NOTIFY_COMMAND = get_env("JOTTER_NOTIFY_COMMAND", "notify-send jotter") or ""

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, name, logging.INFO),
    )
    return logging.getLogger("jotter")
