"""Contains results of the synchronization workflow."""

from collections import Counter

from aha_workflow.synchronize.models import PullRequestModel, SyncOutcome, TrackerItemRef, UpdatePatch


class SyncResult:
    """Contains the result of reconciling one pull request with its tracker item."""

    def __init__(
        self,
        pull_request: PullRequestModel,
        outcome: SyncOutcome,
        ref: TrackerItemRef | None = None,
        patch: UpdatePatch | None = None,
        error: Exception | None = None,
    ) -> None:
        """Initialize the result with the pull request, its outcome, and any patch or error."""
        self.pull_request = pull_request
        self.outcome = outcome
        self.ref = ref
        self.patch = patch
        self.error = error

    @property
    def failed(self) -> bool:
        """Whether the reconciliation ended in a per-item failure."""
        return self.outcome in (SyncOutcome.FETCH_FAILED, SyncOutcome.APPLY_FAILED)


class RepositorySyncResults:
    """Contains the results for every pull request in one repository."""

    def __init__(self, repo: str, results: list[SyncResult], error: Exception | None = None) -> None:
        """Initialize the results for a repository, with the error if listing failed."""
        self.repo = repo
        self.results = results
        self.error = error


class AllSyncResults:
    """Contains the results of a whole reconciliation pass."""

    def __init__(self, repositories: list[RepositorySyncResults]) -> None:
        """Initialize the pass results with per-repository results."""
        self.repositories = repositories

    @property
    def results(self) -> list[SyncResult]:
        """All per-pull-request results across repositories."""
        return [result for repository in self.repositories for result in repository.results]

    @property
    def errors(self) -> list[Exception]:
        """Every repository and per-item error encountered during the pass."""
        errors: list[Exception] = [repository.error for repository in self.repositories if repository.error is not None]
        errors.extend(result.error for result in self.results if result.error is not None)
        return errors

    def outcome_counts(self) -> Counter[SyncOutcome]:
        """Count results by outcome."""
        return Counter(result.outcome for result in self.results)
