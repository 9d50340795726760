"""Contains unit tests for the utils.tables module."""

from io import StringIO

from rich.console import Console

from aha_workflow.synchronize.models import PullRequestModel, SyncOutcome, TrackerItemKind, TrackerItemRef, UpdatePatch
from aha_workflow.synchronize.results import AllSyncResults, RepositorySyncResults, SyncResult
from aha_workflow.utils.tables import print_table, pull_requests_table, sync_results_table


def render(table: object) -> str:
    """Render a rich table to plain text."""
    output = StringIO()
    print_table(table, console=Console(file=output, width=200, color_system=None))  # type: ignore[arg-type]
    return output.getvalue()


def test_pull_requests_table_lists_each_pull_request() -> None:
    """Test that each pull request becomes a row with its labels."""
    table = pull_requests_table(
        "acme/widgets",
        [PullRequestModel(id=42, title="FEAT-9 add retries", url="https://github.com/acme/widgets/pull/42", labels=("qa", "wip"))],
    )

    assert table.row_count == 1
    text = render(table)
    assert "FEAT-9 add retries" in text
    assert "qa,wip" in text


def test_sync_results_table_shows_outcomes_and_changes() -> None:
    """Test that results show their tracker key, outcome and patch fields."""
    results = AllSyncResults(
        [
            RepositorySyncResults(
                "acme/widgets",
                [
                    SyncResult(
                        PullRequestModel(id=1, title="FEAT-1 one", url="https://github.com/acme/widgets/pull/1"),
                        SyncOutcome.DRY_RUN,
                        ref=TrackerItemRef(kind=TrackerItemKind.FEATURE, key="FEAT-1"),
                        patch=UpdatePatch(workflow_status="In code review"),
                    ),
                    SyncResult(
                        PullRequestModel(id=2, title="chore", url="https://github.com/acme/widgets/pull/2"),
                        SyncOutcome.UNMATCHED,
                    ),
                ],
            )
        ]
    )

    table = sync_results_table(results)

    assert table.row_count == 2
    text = render(table)
    assert "FEAT-1" in text
    assert "dry_run" in text
    assert "workflow_status=In code review" in text
