"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit_schemas.latest.models import IssueSearchResultItem, SearchIssuesGetResponse200

from aha_workflow.synchronize.models import PullRequestModel
from aha_workflow.utils.github import extract_label_names, split_repository_in_configuration
from aha_workflow.utils.retry import retry_on_rate_limit

from .abc import PullRequestListerBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except ValueError:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    status_code=422,
                )
                raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc
            raise

    return wrapper  # type: ignore


def search_item_to_pull_request(item: IssueSearchResultItem) -> PullRequestModel:
    """Convert a search result item into a pull request snapshot."""
    return PullRequestModel(
        id=item.number,
        title=item.title,
        url=item.html_url,
        labels=extract_label_names(item.labels),
    )


class GitHubKitAdapter(PullRequestListerBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, repo: str, github_api_token: str, github_api_url: str = "https://api.github.com") -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_api_token: Personal access token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(github_api_token=github_api_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    def open_pull_requests_query(self, author: str) -> str:
        """Build the search query for open pull requests by an author."""
        return f"is:open is:pr repo:{self.owner}/{self.repo_name} author:{author}"

    @handle_github_422
    @retry_on_rate_limit()
    async def list_open_pull_requests(self, author: str, per_page: int = 100) -> list[PullRequestModel]:
        """List open pull requests by an author, handling pagination."""
        query = self.open_pull_requests_query(author)
        logger.debug("Searching GitHub for pull requests", query=query)
        pull_requests: list[PullRequestModel] = []
        page: int = 1
        while True:
            response: Response[SearchIssuesGetResponse200] = await self.client.rest.search.async_issues_and_pull_requests(
                q=query,
                sort="created",
                per_page=per_page,
                page=page,
            )
            items = response.parsed_data.items
            pull_requests.extend(search_item_to_pull_request(item) for item in items)
            if len(items) < per_page:
                break
            page += 1
        logger.info("Found open pull requests", repo=f"{self.owner}/{self.repo_name}", author=author, count=len(pull_requests))
        return pull_requests
