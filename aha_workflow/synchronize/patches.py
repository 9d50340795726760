"""Contains logic for deciding which tracker fields a pull request should update."""

import structlog

from aha_workflow.aha.models import LINKED_PULL_REQUEST_FIELD_NAME, TrackerItemSnapshot
from aha_workflow.synchronize.models import PullRequestModel, UpdatePatch

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

PROMOTABLE_WORKFLOW_STATUSES = frozenset({"Ready to develop", "Under consideration"})
"""Statuses that an open pull request promotes when no label maps to a status."""

DEFAULT_PROMOTED_WORKFLOW_STATUS = "In code review"


def decide_assignee(snapshot: TrackerItemSnapshot, actor_email: str) -> str | None:
    """Assign the item to the actor unless somebody already owns it."""
    if snapshot.assignee is not None:
        logger.debug("Tracker item is already assigned", assignee=snapshot.assignee)
        return None
    return actor_email


def decide_linked_pull_request(snapshot: TrackerItemSnapshot, pull_request: PullRequestModel) -> str | None:
    """Link the pull request unless the item already links one."""
    if snapshot.has_custom_field_value(LINKED_PULL_REQUEST_FIELD_NAME):
        logger.debug("Tracker item already links a pull request", url=snapshot.url)
        return None
    return pull_request.url


def decide_workflow_status(snapshot: TrackerItemSnapshot, mapped_status: str | None) -> str | None:
    """Pick the workflow status to set, if any.

    A status mapped from labels always wins. Otherwise items that have not
    started development yet are promoted, since an open pull request means
    work is underway.
    """
    if mapped_status is not None:
        return mapped_status
    if snapshot.workflow_status_name in PROMOTABLE_WORKFLOW_STATUSES:
        return DEFAULT_PROMOTED_WORKFLOW_STATUS
    return None


def build_update_patch(
    snapshot: TrackerItemSnapshot,
    pull_request: PullRequestModel,
    mapped_status: str | None,
    actor_email: str,
) -> UpdatePatch:
    """Build the minimal set of field updates for a tracker item."""
    patch = UpdatePatch(
        assignee=decide_assignee(snapshot, actor_email),
        linked_pr_field=decide_linked_pull_request(snapshot, pull_request),
        workflow_status=decide_workflow_status(snapshot, mapped_status),
    )
    logger.debug(
        "Built update patch",
        pull_request=pull_request.url,
        current_status=snapshot.workflow_status_name,
        patch=patch.model_dump(exclude_none=True),
    )
    return patch
