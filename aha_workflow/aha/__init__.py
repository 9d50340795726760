"""Aha! tracker client module."""

from .abc import TrackerClientBase
from .client import AhaClient
from .exceptions import ApplyFailure, FetchFailure, TrackerError, TrackerFailureReason
from .models import TrackerItemSnapshot

__all__ = [
    "TrackerClientBase",
    "AhaClient",
    "TrackerError",
    "FetchFailure",
    "ApplyFailure",
    "TrackerFailureReason",
    "TrackerItemSnapshot",
]
