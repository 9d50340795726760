"""Sets up the authenticated githubkit client."""

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

GitHubClient = GitHub[TokenAuthStrategy]


async def get_github_client(github_api_token: str, github_api_url: str) -> GitHubClient:
    """Returns an authenticated GitHub client using a personal access token.

    Supports custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_api_token:
        raise RuntimeError("GitHub authentication requires github_api_token in config.")
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(github_api_token), base_url=github_api_url, http_cache=False)
