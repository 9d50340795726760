"""Retry decorator for GitHub API rate limits.

Only rate limit responses are retried. Any other failure is raised to the
caller on the first attempt.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def rate_limit_wait_time(exc: Exception, default: float) -> float:
    """Work out how long to wait before retrying a rate-limited request."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)) and exc.retry_after:
        return exc.retry_after.total_seconds()
    if isinstance(exc, RequestFailed):
        retry_after = exc.response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                logger.warning("Invalid retry-after header value", retry_after=retry_after)
        rate_limit_reset = exc.response.headers.get("x-ratelimit-reset")
        if rate_limit_reset:
            try:
                reset_in = int(rate_limit_reset) - int(time.time())
            except ValueError:
                logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
            else:
                if reset_in > 0:
                    return reset_in + 1
    return default


def is_rate_limit_error(exc: Exception) -> bool:
    """Whether a githubkit exception signals a rate limit."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    if isinstance(exc, RequestFailed):
        if exc.response.status_code == 429:
            return True
        return exc.response.status_code == 403 and exc.response.headers.get("x-ratelimit-remaining") == "0"
    return False


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls that hit a rate limit.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Delay in seconds used when GitHub gives no hint (default: 10.0)
        max_delay: Maximum delay in seconds between retries (default: 300.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except RequestFailed as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt == max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, attempt=attempt + 1)
                        raise
                    wait_time = min(rate_limit_wait_time(exc, delay), max_delay)
                    logger.warning(
                        "GitHub rate limit exceeded, waiting before retrying",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
