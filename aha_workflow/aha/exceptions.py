"""Contains exceptions raised when reading or writing Aha! records."""

from enum import Enum

from aha_workflow.synchronize.models import TrackerItemRef


class TrackerFailureReason(str, Enum):
    """Why a tracker request failed."""

    NOT_FOUND = "not_found"
    UNPARSABLE = "unparsable"
    TRANSPORT = "transport"


class TrackerError(Exception):
    """Base class for per-item tracker failures."""

    action = "access"

    def __init__(self, ref: TrackerItemRef, reason: TrackerFailureReason, detail: str) -> None:
        """Initializes the exception with the item reference and failure reason."""
        super().__init__(f"Failed to {self.action} {ref.kind.value} {ref.key} ({reason.value}): {detail}")
        self.ref = ref
        self.reason = reason
        self.detail = detail


class FetchFailure(TrackerError):
    """Raised when a tracker item cannot be fetched or its payload cannot be parsed."""

    action = "fetch"


class ApplyFailure(TrackerError):
    """Raised when a patch cannot be written or the response cannot be parsed."""

    action = "update"
