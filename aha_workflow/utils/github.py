"""Contains utility functions for GitHub interactions."""

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HasName(Protocol):
    """Protocol for objects that have a name attribute."""

    name: str


LabelType = str | dict[str, Any] | HasName


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository is required in the configuration.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def extract_label_names(labels: Sequence[LabelType] | None) -> tuple[str, ...]:
    """Extract label names from GitHub label objects, strings, or dicts, keeping their order."""
    names: list[str] = []
    for label in labels or ():
        if isinstance(label, str):
            names.append(label)
        elif isinstance(label, dict) and isinstance(label.get("name"), str):
            names.append(label["name"])
        elif isinstance(label, HasName) and isinstance(label.name, str):
            names.append(label.name)
    return tuple(names)
