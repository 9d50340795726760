"""Desktop notifications for tracker updates."""

import shutil
import subprocess
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


class Notifier(Protocol):
    """Protocol for objects that can show a notification to the user."""

    def notify(self, summary: str, body: str) -> None:
        """Show a notification. Implementations must not raise."""
        ...


class NullNotifier:
    """Notifier used when notifications are silenced."""

    def notify(self, summary: str, body: str) -> None:
        """Discard the notification."""
        return None


class DesktopNotifier:
    """Shows notifications through the freedesktop ``notify-send`` command."""

    def __init__(self, command: str = "notify-send", timeout: float = 5.0) -> None:
        """Initialize the notifier with the command used to display notifications."""
        self.command = command
        self.timeout = timeout

    def notify(self, summary: str, body: str) -> None:
        """Show a notification, logging and ignoring any failure."""
        executable = shutil.which(self.command)
        if executable is None:
            logger.warning("Notification command not found", command=self.command, summary=summary)
            return
        try:
            subprocess.run([executable, summary, body], capture_output=True, text=True, check=True, timeout=self.timeout)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Failed to show notification", summary=summary, error=str(exc))
