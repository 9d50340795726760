"""Console tables for verbose output."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from aha_workflow.synchronize.models import PullRequestModel
from aha_workflow.synchronize.results import AllSyncResults


def pull_requests_table(repo: str, pull_requests: Sequence[PullRequestModel]) -> Table:
    """Build a table of the pull requests found in a repository."""
    table = Table(title=f"Open pull requests in {repo}")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Labels")
    table.add_column("URL")
    for pull_request in pull_requests:
        table.add_row(str(pull_request.id), pull_request.title, ",".join(pull_request.labels), pull_request.url)
    return table


def sync_results_table(results: AllSyncResults) -> Table:
    """Build a table summarizing what happened to each pull request."""
    table = Table(title="Reconciliation results")
    table.add_column("Pull request")
    table.add_column("Tracker item")
    table.add_column("Outcome")
    table.add_column("Changes")
    for result in results.results:
        changes = ", ".join(f"{name}={value}" for name, value in result.patch.model_dump(exclude_none=True).items()) if result.patch else ""
        table.add_row(
            result.pull_request.url,
            result.ref.key if result.ref else "-",
            result.outcome.value,
            changes,
        )
    return table


def print_table(table: Table, console: Console | None = None) -> None:
    """Print a table to the console."""
    (console or Console()).print(table)
