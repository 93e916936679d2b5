"""Sequence allocator for new journal entry stems.

A stem looks like ``entry-20261018-093000UTC-50``: a fixed prefix, the UTC
time at second resolution and a two-digit counter that starts at 50 for
each second. Lexicographic order of stems is creation order, which the
document assembler relies on when it sorts by path.

Scan-then-create is not atomic. Two allocations racing in the same second
against the same directory can return the same stem.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from jotter.core.config import STEM_PREFIX

logger = logging.getLogger(__name__)

FIRST_COUNTER = 50
MAX_COUNTER = 99

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S%Z"


def format_timestamp(moment: datetime) -> str:
    """Format a moment as the UTC, second-resolution stem timestamp."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _stem_pattern(prefix: str, timestamp: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}-{re.escape(timestamp)}-(\d{{2,}})\.")


def next_counter(names: list[str], prefix: str, timestamp: str) -> int:
    """
    Compute the counter for a new stem from existing filenames.

    Args:
        names: Basenames present in the target directory
        prefix: Stem prefix
        timestamp: Formatted timestamp the new stem will carry

    Returns:
        50 when no file shares the timestamp, otherwise the highest
        existing counter plus one.
    """
    pattern = _stem_pattern(prefix, timestamp)
    counters = [int(m.group(1)) for name in names if (m := pattern.match(name))]
    if not counters:
        return FIRST_COUNTER
    return max(counters) + 1


def allocate_stem(
    directory: Path | str,
    now: datetime | None = None,
    prefix: str = STEM_PREFIX,
) -> str:
    """
    Allocate a filename stem that no file in the directory uses yet.

    Args:
        directory: Target directory (scanned non-recursively)
        now: Moment to stamp, defaults to the current UTC time
        prefix: Stem prefix

    Returns:
        Stem such as ``entry-20261018-093000UTC-50``
    """
    timestamp = format_timestamp(now or datetime.now(timezone.utc))

    root = Path(directory)
    names = [p.name for p in root.iterdir()] if root.is_dir() else []

    counter = next_counter(names, prefix, timestamp)
    if counter > MAX_COUNTER:
        logger.warning(
            f"Counter {counter} for {timestamp} exceeds {MAX_COUNTER}; "
            "stems past this point no longer sort in creation order"
        )

    stem = f"{prefix}-{timestamp}-{counter:02d}"
    logger.debug(f"Allocated stem {stem} in {root}")
    return stem
