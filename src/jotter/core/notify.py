"""Desktop notification delivery.

Notifications are a courtesy: a failing notifier is logged and never fails
the operation that triggered it.
"""

import logging
import shlex
import subprocess
from typing import Protocol

from jotter.core.config import NOTIFY_COMMAND

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Callback signature for user notifications."""

    def notify(self, message: str) -> None:
        pass


class NullNotifier:
    """Notifier that drops every message."""

    def notify(self, message: str) -> None:
        logger.debug(f"Notification suppressed: {message}")


class CommandNotifier:
    """Delivers a message by running an external command with it appended."""

    def __init__(
        self, command: str | list[str] = NOTIFY_COMMAND, timeout: float = 5.0
    ):
        self.command = shlex.split(command) if isinstance(command, str) else command
        self.timeout = timeout

    def notify(self, message: str) -> None:
        if not self.command:
            logger.debug("No notification command configured")
            return

        try:
            result = subprocess.run(
                [*self.command, message],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Notification command {self.command[0]} failed: {e}")
            return

        if result.returncode != 0:
            logger.warning(
                f"Notification command exited {result.returncode}: "
                f"{result.stderr.strip()}"
            )
