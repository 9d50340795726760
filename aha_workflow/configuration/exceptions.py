"""Contains exceptions raised when reconciling application configuration."""

from pathlib import Path


class ConfigurationError(Exception):
    """Raised when the configuration cannot be used to run a reconciliation pass."""

    pass


class RequiredConfigurationElementError(ConfigurationError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str | None, env_name: str | None) -> None:
        """Initializes the exception with the name of the missing element."""
        sources: list[str] = []
        if cli_name:
            sources.append(f"command line option {cli_name}")
        if env_name:
            sources.append(f"environment variable {env_name}")
        message = f"Missing required configuration element: {name}"
        if sources:
            message += f" (set it with {' or '.join(sources)})"
        super().__init__(message)
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class ConfigurationFileError(ConfigurationError):
    """Raised when the configuration file exists but cannot be read or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initializes the exception with the offending path and the reason."""
        super().__init__(f"Invalid configuration file {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidRepositoryError(ConfigurationError):
    """Raised when a repository identifier is not in 'owner/repo' format."""

    def __init__(self, repo: str) -> None:
        """Initializes the exception with the malformed repository identifier."""
        super().__init__(f"Repository '{repo}' must be in the format 'owner/repo'")
        self.repo = repo
