"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio
from pathlib import Path

from aha_workflow.configuration import reconcile
from aha_workflow.configuration.models import SyncConfig


def get_sync_config(
    repo: str | None = None,
    config_file: Path | None = None,
    github_api_url: str | None = None,
    dry_run: bool = False,
    silent: bool = False,
    verbose: bool = False,
) -> SyncConfig:
    """Synchronously get the reconciled sync configuration."""
    return asyncio.run(
        reconcile.reconcile_sync_configuration(
            cli_repo=repo,
            cli_config_file=config_file,
            cli_github_api_url=github_api_url,
            cli_dry_run=dry_run,
            cli_silent=silent,
            cli_verbose=verbose,
        )
    )
