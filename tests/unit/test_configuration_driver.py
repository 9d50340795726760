"""Unit tests for the configuration driver module."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

from aha_workflow.configuration import driver
from aha_workflow.configuration.models import RepoConfig, SyncConfig


def test_get_sync_config_passes_cli_values_to_reconcile() -> None:
    """Test that get_sync_config forwards the CLI values and returns the reconciled config."""
    fake_config = SyncConfig(
        github_api_url="https://api.github.com",
        github_api_token="gh-token",
        aha_domain="acme",
        aha_token="aha-token",
        actor_email="dev@example.com",
        repos=[RepoConfig(name="acme/widgets", username="octocat")],
        dry_run=True,
    )
    with patch(
        "aha_workflow.configuration.reconcile.reconcile_sync_configuration",
        new=AsyncMock(return_value=fake_config),
    ) as mock_reconcile:
        result = driver.get_sync_config(
            repo="acme/widgets",
            config_file=Path("aha_workflow.toml"),
            github_api_url=None,
            dry_run=True,
        )

    mock_reconcile.assert_awaited_once_with(
        cli_repo="acme/widgets",
        cli_config_file=Path("aha_workflow.toml"),
        cli_github_api_url=None,
        cli_dry_run=True,
        cli_silent=False,
        cli_verbose=False,
    )
    assert result == fake_config
