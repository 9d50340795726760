"""Orchestrates a reconciliation pass over every configured repository."""

import time

import structlog
from githubkit.exception import GitHubException

from aha_workflow.aha.abc import TrackerClientBase
from aha_workflow.aha.client import AhaClient
from aha_workflow.configuration.models import RepoConfig, SyncConfig
from aha_workflow.github.adapter import GitHubKitAdapter
from aha_workflow.synchronize.engine import ReconciliationEngine
from aha_workflow.synchronize.results import AllSyncResults, RepositorySyncResults, SyncResult
from aha_workflow.utils.notify import DesktopNotifier, Notifier, NullNotifier
from aha_workflow.utils.tables import print_table, pull_requests_table

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def sync_repository(repo: RepoConfig, config: SyncConfig, engine: ReconciliationEngine) -> RepositorySyncResults:
    """List a repository's open pull requests once and reconcile each of them in turn."""
    try:
        github_adapter = await GitHubKitAdapter.create(
            repo=repo.name,
            github_api_token=config.github_api_token,
            github_api_url=config.github_api_url,
        )
        pull_requests = await github_adapter.list_open_pull_requests(author=repo.username)
    except (GitHubException, ValueError, RuntimeError) as exc:
        logger.error("Failed to list pull requests", repo=repo.name, author=repo.username, error=str(exc))
        return RepositorySyncResults(repo.name, [], error=exc)

    if config.verbose:
        print_table(pull_requests_table(repo.name, pull_requests))

    results: list[SyncResult] = []
    for pull_request in pull_requests:
        results.append(await engine.sync(pull_request, repo.labels))
    return RepositorySyncResults(repo.name, results)


async def run_sync_workflow(
    config: SyncConfig,
    tracker: TrackerClientBase | None = None,
    notifier: Notifier | None = None,
) -> AllSyncResults:
    """Run one reconciliation pass: every open pull request of every configured repository."""
    if notifier is None:
        notifier = NullNotifier() if config.silent else DesktopNotifier()

    start_time = time.time()
    logger.info("Starting reconciliation pass", repo_count=len(config.repos), dry_run=config.dry_run)

    if tracker is None:
        async with AhaClient.create(domain=config.aha_domain, token=config.aha_token) as aha_client:
            repositories = await _sync_all_repositories(config, aha_client, notifier)
    else:
        repositories = await _sync_all_repositories(config, tracker, notifier)

    all_results = AllSyncResults(repositories)
    logger.info(
        "Finished reconciliation pass",
        duration=round(time.time() - start_time, 2),
        outcomes={outcome.value: count for outcome, count in all_results.outcome_counts().items()},
        error_count=len(all_results.errors),
    )
    return all_results


async def _sync_all_repositories(config: SyncConfig, tracker: TrackerClientBase, notifier: Notifier) -> list[RepositorySyncResults]:
    engine = ReconciliationEngine(
        tracker=tracker,
        actor_email=config.actor_email,
        notifier=notifier,
        dry_run=config.dry_run,
        silent=config.silent,
    )
    repositories: list[RepositorySyncResults] = []
    for repo in config.repos:
        logger.info("Processing repository", repo=repo.name, author=repo.username)
        repositories.append(await sync_repository(repo, config, engine))
    return repositories
