"""Retry decorator for waiting out GitHub API rate limits.

Only rate-limit responses are retried. Any other failure propagates to the
caller unchanged so the CI step fails.
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


def is_rate_limit_error(exc: RequestFailed) -> bool:
    """Return True if a failed request was rejected because of a rate limit."""
    status_code = exc.response.status_code
    if status_code == 429:
        return True
    if status_code != 403:
        return False
    if exc.response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in str(exc).lower()


def rate_limit_wait_time(exc: RequestFailed, fallback: float) -> float:
    """Compute how long to wait before retrying a rate-limited request.

    Prefers the retry-after header, then x-ratelimit-reset, then the fallback.
    """
    headers = exc.response.headers
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            current_timestamp = int(time.time())
            if reset_timestamp > current_timestamp:
                return float(reset_timestamp - current_timestamp + 1)

    return fallback


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls that hit a rate limit.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Delay in seconds used when GitHub sends no wait hint (default: 10.0)
        max_delay: Upper bound for any single wait in seconds (default: 300.0)
        exponential_base: Growth factor of the fallback delay between attempts (default: 2.0)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_rate_limit()
        async def list_labels(self, page: int) -> LabelPage:
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
                    if attempt >= max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, attempt=attempt + 1)
                        raise
                    if exc.retry_after:
                        wait_time = min(exc.retry_after.total_seconds(), max_delay)
                    else:
                        wait_time = min(delay, max_delay)
                    rate_limit_type = "primary" if isinstance(exc, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise
                    wait_time = min(rate_limit_wait_time(exc, delay), max_delay)
                    rate_limit_type = "http"

                attempt += 1
                logger.warning(
                    f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
