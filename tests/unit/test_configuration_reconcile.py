"""Unit tests for the configuration reconcile module."""

from pathlib import Path
from typing import Any

import pytest

from aha_workflow.configuration.env import Settings
from aha_workflow.configuration.exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    InvalidRepositoryError,
    RequiredConfigurationElementError,
)
from aha_workflow.configuration.models import RepoConfig
from aha_workflow.configuration.reconcile import load_config_file, reconcile_sync_configuration

CONFIG_FILE = """
[aha]
domain = "acme"
email = "file@example.com"

[[repos]]
name = "acme/widgets"
username = "octocat"
labels = { "qa" = "In QA" }

[[repos]]
name = "acme/gadgets"
username = "hubot"
"""


def make_settings(**overrides: Any) -> Settings:
    """Build settings that ignore the real environment and .env files."""
    values: dict[str, Any] = {
        "GITHUB_API_URL": "https://api.github.com",
        "GITHUB_API_TOKEN": "gh-token",
        "AHA_DOMAIN": "env-domain",
        "AHA_TOKEN": "aha-token",
        "WORKFLOW_REPO": "acme/env-repo",
        "WORKFLOW_LOGIN": "env-login",
        "WORKFLOW_EMAIL": "env@example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a valid config file."""
    path = tmp_path / ".aha_workflow"
    path.write_text(CONFIG_FILE)
    return path


@pytest.mark.asyncio
async def test_load_config_file_missing_returns_none(tmp_path: Path) -> None:
    """Test that a missing config file is not an error."""
    assert await load_config_file(tmp_path / "missing") is None


@pytest.mark.asyncio
async def test_load_config_file(config_file: Path) -> None:
    """Test that a valid config file is parsed."""
    file_config = await load_config_file(config_file)
    assert file_config is not None
    assert file_config.aha is not None
    assert file_config.aha.domain == "acme"
    assert file_config.repos == [
        RepoConfig(name="acme/widgets", username="octocat", labels={"qa": "In QA"}),
        RepoConfig(name="acme/gadgets", username="hubot"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        pytest.param("not = [valid", id="invalid toml"),
        pytest.param('[[repos]]\nname = "acme/widgets"\n', id="repo without username"),
        pytest.param('[aha]\ndomain = "acme"\n', id="aha without email"),
    ],
)
async def test_load_config_file_invalid(tmp_path: Path, content: str) -> None:
    """Test that an unusable config file raises a configuration error."""
    path = tmp_path / ".aha_workflow"
    path.write_text(content)
    with pytest.raises(ConfigurationFileError):
        await load_config_file(path)


@pytest.mark.asyncio
async def test_environment_only_configuration(tmp_path: Path) -> None:
    """Test that the environment alone describes a single repository."""
    config = await reconcile_sync_configuration(cli_config_file=tmp_path / "missing", settings=make_settings())

    assert config.aha_domain == "env-domain"
    assert config.actor_email == "env@example.com"
    assert config.github_api_url == "https://api.github.com"
    assert config.repos == [RepoConfig(name="acme/env-repo", username="env-login")]
    assert config.dry_run is False


@pytest.mark.asyncio
async def test_config_file_overrides_environment(config_file: Path) -> None:
    """Test that the config file's [aha] table and repositories win over the environment."""
    config = await reconcile_sync_configuration(
        cli_config_file=config_file,
        cli_dry_run=True,
        cli_silent=True,
        cli_verbose=True,
        settings=make_settings(),
    )

    assert config.aha_domain == "acme"
    assert config.actor_email == "file@example.com"
    assert [repo.name for repo in config.repos] == ["acme/widgets", "acme/gadgets"]
    assert config.dry_run and config.silent and config.verbose


@pytest.mark.asyncio
async def test_config_file_repositories_win_over_cli_repo(config_file: Path) -> None:
    """Test that the config file's repositories are used even when --repo is given."""
    config = await reconcile_sync_configuration(cli_repo="acme/other", cli_config_file=config_file, settings=make_settings())
    assert [repo.name for repo in config.repos] == ["acme/widgets", "acme/gadgets"]
    assert config.repos[0].labels == {"qa": "In QA"}


@pytest.mark.asyncio
async def test_cli_repo_used_when_config_file_lists_no_repositories(tmp_path: Path) -> None:
    """Test that --repo wins over the environment when the config file has no repositories."""
    path = tmp_path / ".aha_workflow"
    path.write_text('[aha]\ndomain = "acme"\nemail = "file@example.com"\n')
    config = await reconcile_sync_configuration(cli_repo="acme/other", cli_config_file=path, settings=make_settings())
    assert config.repos == [RepoConfig(name="acme/other", username="env-login")]


@pytest.mark.asyncio
async def test_cli_github_api_url_wins(tmp_path: Path) -> None:
    """Test that the GitHub API URL from the command line is used."""
    config = await reconcile_sync_configuration(
        cli_config_file=tmp_path / "missing",
        cli_github_api_url="https://github.example.com/api/v3",
        settings=make_settings(),
    )
    assert config.github_api_url == "https://github.example.com/api/v3"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing,expected_env_name",
    [
        pytest.param("GITHUB_API_TOKEN", "GITHUB_API_TOKEN", id="github token"),
        pytest.param("AHA_TOKEN", "AHA_TOKEN", id="aha token"),
        pytest.param("AHA_DOMAIN", "AHA_DOMAIN", id="aha domain"),
        pytest.param("WORKFLOW_EMAIL", "WORKFLOW_EMAIL", id="email"),
        pytest.param("WORKFLOW_REPO", "WORKFLOW_REPO", id="repository"),
        pytest.param("WORKFLOW_LOGIN", "WORKFLOW_LOGIN", id="login"),
    ],
)
async def test_missing_required_elements(tmp_path: Path, missing: str, expected_env_name: str) -> None:
    """Test that missing required settings are reported with their environment variable."""
    with pytest.raises(RequiredConfigurationElementError) as exc_info:
        await reconcile_sync_configuration(cli_config_file=tmp_path / "missing", settings=make_settings(**{missing: None}))

    assert exc_info.value.env_name == expected_env_name
    assert expected_env_name in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_repository_is_fatal(tmp_path: Path) -> None:
    """Test that a malformed repository identifier is rejected."""
    with pytest.raises(InvalidRepositoryError) as exc_info:
        await reconcile_sync_configuration(cli_repo="not-a-repo", cli_config_file=tmp_path / "missing", settings=make_settings())

    assert isinstance(exc_info.value, ConfigurationError)
    assert "not-a-repo" in str(exc_info.value)
