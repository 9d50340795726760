"""Internal data models passed between the synchronization stages."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TrackerItemKind(str, Enum):
    """Kinds of Aha! records a pull request title can refer to."""

    FEATURE = "feature"
    REQUIREMENT = "requirement"


class TrackerItemRef(BaseModel):
    """Reference to a tracker item parsed out of a pull request title."""

    model_config = ConfigDict(frozen=True)

    kind: TrackerItemKind
    key: str


class PullRequestModel(BaseModel):
    """Snapshot of an open GitHub pull request."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    url: str
    labels: tuple[str, ...] = ()


class UpdatePatch(BaseModel):
    """Field updates to send to the tracker. Unset fields are left untouched."""

    assignee: str | None = None
    linked_pr_field: str | None = None
    workflow_status: str | None = None

    def is_empty(self) -> bool:
        """Return True when no field needs to change."""
        return self.assignee is None and self.linked_pr_field is None and self.workflow_status is None


class SyncOutcome(str, Enum):
    """Terminal state of one pull request reconciliation."""

    UNMATCHED = "unmatched"
    NOOP = "noop"
    APPLIED = "applied"
    DRY_RUN = "dry_run"
    FETCH_FAILED = "fetch_failed"
    APPLY_FAILED = "apply_failed"
