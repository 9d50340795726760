"""Contains the reconciliation of a single pull request with its Aha! record."""

import asyncio
from collections.abc import Mapping

import structlog
from structlog.contextvars import bound_contextvars

from aha_workflow.aha.abc import TrackerClientBase
from aha_workflow.aha.exceptions import ApplyFailure, FetchFailure
from aha_workflow.synchronize.keys import extract_tracker_item_ref
from aha_workflow.synchronize.models import PullRequestModel, SyncOutcome
from aha_workflow.synchronize.patches import build_update_patch
from aha_workflow.synchronize.results import SyncResult
from aha_workflow.synchronize.statuses import map_labels_to_status
from aha_workflow.utils.notify import Notifier, NullNotifier

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ReconciliationEngine:
    """Brings a tracker item in line with an open pull request that references it.

    Each call to ``sync`` performs at most one read and one write against the
    tracker. Failures for one pull request are reported in its result and never
    raised, so a batch of pull requests always runs to completion.
    """

    def __init__(
        self,
        tracker: TrackerClientBase,
        actor_email: str,
        notifier: Notifier | None = None,
        dry_run: bool = False,
        silent: bool = False,
    ) -> None:
        """Initialize the engine with its tracker client and run options."""
        self.tracker = tracker
        self.actor_email = actor_email
        self.notifier = notifier or NullNotifier()
        self.dry_run = dry_run
        self.silent = silent

    async def _notify(self, summary: str, body: str) -> None:
        if self.silent:
            return
        try:
            # notify-send blocks until the notification daemon answers
            await asyncio.to_thread(self.notifier.notify, summary, body)
        except Exception as exc:
            logger.warning("Notification failed", summary=summary, error=str(exc))

    async def sync(self, pull_request: PullRequestModel, overrides: Mapping[str, str] | None = None) -> SyncResult:
        """Reconcile one pull request with the tracker item named in its title."""
        ref = extract_tracker_item_ref(pull_request.title)
        if ref is None:
            logger.info("Skipping pull request without a tracker key", pull_request=pull_request.url, title=pull_request.title)
            return SyncResult(pull_request, SyncOutcome.UNMATCHED)

        with bound_contextvars(kind=ref.kind.value, key=ref.key, pull_request=pull_request.url):
            try:
                snapshot = await self.tracker.fetch_item(ref)
            except FetchFailure as exc:
                logger.error("Failed to fetch tracker item", reason=exc.reason.value, error=exc.detail)
                return SyncResult(pull_request, SyncOutcome.FETCH_FAILED, ref=ref, error=exc)

            mapped_status = map_labels_to_status(pull_request.labels, overrides)
            patch = build_update_patch(snapshot, pull_request, mapped_status, self.actor_email)
            if patch.is_empty():
                logger.info("Tracker item is up to date")
                return SyncResult(pull_request, SyncOutcome.NOOP, ref=ref, patch=patch)

            await self._notify(ref.key, f"{snapshot.url}\n{pull_request.url}")

            if self.dry_run:
                logger.info("Dry run, not updating tracker item", patch=patch.model_dump(exclude_none=True))
                return SyncResult(pull_request, SyncOutcome.DRY_RUN, ref=ref, patch=patch)

            try:
                updated = await self.tracker.apply_patch(ref, patch)
            except ApplyFailure as exc:
                logger.error("Failed to update tracker item", reason=exc.reason.value, error=exc.detail)
                return SyncResult(pull_request, SyncOutcome.APPLY_FAILED, ref=ref, patch=patch, error=exc)

            logger.info(
                "Updated tracker item",
                patch=patch.model_dump(exclude_none=True),
                workflow_status=updated.workflow_status_name,
            )
            return SyncResult(pull_request, SyncOutcome.APPLIED, ref=ref, patch=patch)
