"""Models for configuration between CLI arguments, environment variables, and the config file."""

from dataclasses import dataclass, field

from pydantic import BaseModel


class AhaFileConfig(BaseModel):
    """Pydantic model for the [aha] table of the config file."""

    domain: str
    email: str


class RepoConfig(BaseModel):
    """Pydantic model for a repository whose pull requests are synchronized."""

    name: str
    username: str
    labels: dict[str, str] | None = None


class FileConfig(BaseModel):
    """Pydantic model for the TOML config file."""

    aha: AhaFileConfig | None = None
    repos: list[RepoConfig] | None = None


@dataclass
class SyncConfig:
    """Configuration class for the sync command."""

    github_api_url: str
    github_api_token: str
    aha_domain: str
    aha_token: str
    actor_email: str
    repos: list[RepoConfig] = field(default_factory=list)
    dry_run: bool = False
    silent: bool = False
    verbose: bool = False
