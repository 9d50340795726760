"""Utility modules for shared functionality."""

from .notify import DesktopNotifier, Notifier, NullNotifier
from .retry import retry_on_rate_limit

__all__ = [
    "DesktopNotifier",
    "Notifier",
    "NullNotifier",
    "retry_on_rate_limit",
]
