"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod

from aha_workflow.synchronize.models import PullRequestModel


class PullRequestListerBase(ABC):
    """Base ABC for GitHub clients that list pull requests."""

    @abstractmethod
    async def list_open_pull_requests(self, author: str) -> list[PullRequestModel]:
        """List open pull requests in the repository opened by an author."""
        pass
