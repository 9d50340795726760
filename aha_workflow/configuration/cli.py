"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from aha_workflow.configuration.driver import get_sync_config
from aha_workflow.configuration.exceptions import ConfigurationError
from aha_workflow.synchronize.driver import run_sync_workflow
from aha_workflow.synchronize.models import SyncOutcome
from aha_workflow.utils.logs import configure_logging
from aha_workflow.utils.tables import print_table, sync_results_table

load_dotenv()
load_dotenv(Path.home() / ".env")

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


@typer_app.callback()
def main() -> None:
    """Keep Aha! features and requirements in step with your open GitHub pull requests."""


@typer_app.command(name="sync")
def sync_cli(
    repo: Annotated[str | None, Option("--repo", "-r", help="Repository name (owner/repo). Used when the config file lists no repositories.")] = None,
    dry_run: Annotated[bool, Option("--dryrun", "-d", help="Compute updates without writing them to Aha!.")] = False,
    silent: Annotated[bool, Option("--silent", "-s", help="Suppress desktop notifications and informational output.")] = False,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Enable diagnostic output.")] = False,
    config_file: Annotated[Path | None, Option("--config", "-c", help="Path to the TOML config file (defaults to ~/.aha_workflow).")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
) -> None:
    """Reconcile open pull requests with their Aha! records."""
    configure_logging(verbose=verbose, silent=silent)

    try:
        config = get_sync_config(
            repo=repo,
            config_file=config_file,
            github_api_url=github_api_url,
            dry_run=dry_run,
            silent=silent,
            verbose=verbose,
        )
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if dry_run and not silent:
        typer.echo("Dry run is enabled - no changes will be written to Aha!")

    results = asyncio.run(run_sync_workflow(config))

    if verbose:
        print_table(sync_results_table(results))

    for error in results.errors:
        typer.echo(str(error), err=True)

    if not silent:
        counts = results.outcome_counts()
        typer.echo(
            f"Processed {len(results.results)} pull request(s): "
            f"{counts[SyncOutcome.APPLIED]} updated, "
            f"{counts[SyncOutcome.DRY_RUN]} would be updated, "
            f"{counts[SyncOutcome.NOOP]} up to date, "
            f"{counts[SyncOutcome.UNMATCHED]} without a tracker key, "
            f"{counts[SyncOutcome.FETCH_FAILED] + counts[SyncOutcome.APPLY_FAILED]} failed"
        )


if __name__ == "__main__":
    typer_app()
