"""Reconciles configuration between CLI arguments, environment variables, and the config file."""

import tomllib
from pathlib import Path

import structlog
from pydantic import ValidationError

from aha_workflow.configuration.env import Settings
from aha_workflow.configuration.exceptions import (
    ConfigurationFileError,
    InvalidRepositoryError,
    RequiredConfigurationElementError,
)
from aha_workflow.configuration.models import FileConfig, RepoConfig, SyncConfig
from aha_workflow.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE_NAME = ".aha_workflow"


def default_config_file_path() -> Path:
    """Return the config file used when none is given on the command line."""
    return Path.home() / DEFAULT_CONFIG_FILE_NAME


async def load_config_file(path: Path) -> FileConfig | None:
    """Load and validate the TOML config file.

    Returns None if the file does not exist.

    Raises:
        ConfigurationFileError: If the file exists but is not valid TOML or does not match the schema.
    """
    if not path.exists():
        logger.info("Config file not found, using environment only", path=str(path))
        return None
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationFileError(path, str(exc)) from exc
    try:
        file_config = FileConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationFileError(path, str(exc)) from exc
    logger.info("Loaded config file", path=str(path), repo_count=len(file_config.repos or []))
    return file_config


async def reconcile_repositories(
    cli_repo: str | None,
    env_repo: str | None,
    env_login: str | None,
    file_repos: list[RepoConfig] | None,
) -> list[RepoConfig]:
    """Decide which repositories to synchronize.

    Repositories listed in the config file are always used. Only when the
    file lists none is a single repository built from the command line or
    the environment, with the author login taken from the environment.
    """
    if file_repos:
        if cli_repo:
            logger.info("Config file lists repositories, ignoring --repo", repo=cli_repo, repo_count=len(file_repos))
        return file_repos

    name = cli_repo or env_repo
    if not name:
        raise RequiredConfigurationElementError(name="Repository", cli_name="--repo", env_name="WORKFLOW_REPO")
    if not env_login:
        raise RequiredConfigurationElementError(name="GitHub login of the pull request author", cli_name=None, env_name="WORKFLOW_LOGIN")
    return [RepoConfig(name=name, username=env_login)]


async def validate_repositories(repos: list[RepoConfig]) -> None:
    """Check every repository identifier before any network activity."""
    for repo in repos:
        try:
            await split_repository_in_configuration(repo.name)
        except ValueError as exc:
            raise InvalidRepositoryError(repo.name) from exc


async def reconcile_sync_configuration(
    cli_repo: str | None = None,
    cli_config_file: Path | None = None,
    cli_github_api_url: str | None = None,
    cli_dry_run: bool = False,
    cli_silent: bool = False,
    cli_verbose: bool = False,
    settings: Settings | None = None,
) -> SyncConfig:
    """Reconcile CLI arguments, environment variables, and the config file into a sync configuration.

    Values in the config file's [aha] table take precedence over the
    environment, and CLI arguments take precedence over both.

    Raises:
        ConfigurationError: If the configuration is incomplete or malformed.
    """
    if settings is None:
        settings = Settings()
    file_config = await load_config_file(cli_config_file or default_config_file_path())

    aha_domain = settings.AHA_DOMAIN
    actor_email = settings.WORKFLOW_EMAIL
    if file_config is not None and file_config.aha is not None:
        aha_domain = file_config.aha.domain
        actor_email = file_config.aha.email

    if not settings.GITHUB_API_TOKEN:
        raise RequiredConfigurationElementError(name="GitHub API token", cli_name=None, env_name="GITHUB_API_TOKEN")
    if not settings.AHA_TOKEN:
        raise RequiredConfigurationElementError(name="Aha! API token", cli_name=None, env_name="AHA_TOKEN")
    if not aha_domain:
        raise RequiredConfigurationElementError(name="Aha! domain", cli_name=None, env_name="AHA_DOMAIN")
    if not actor_email:
        raise RequiredConfigurationElementError(name="Email to assign tracker items to", cli_name=None, env_name="WORKFLOW_EMAIL")

    repos = await reconcile_repositories(
        cli_repo=cli_repo,
        env_repo=settings.WORKFLOW_REPO,
        env_login=settings.WORKFLOW_LOGIN,
        file_repos=file_config.repos if file_config is not None else None,
    )
    await validate_repositories(repos)

    return SyncConfig(
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_api_token=settings.GITHUB_API_TOKEN,
        aha_domain=aha_domain,
        aha_token=settings.AHA_TOKEN,
        actor_email=actor_email,
        repos=repos,
        dry_run=cli_dry_run,
        silent=cli_silent,
        verbose=cli_verbose,
    )
