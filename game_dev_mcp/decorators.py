"""
Decorators for error handling, retry logic, and request management.

Provides error mapping and automatic retry for transient failures in
Linear API operations.
"""

import asyncio
import logging
from functools import wraps
from typing import Callable, TypeVar, Optional

import httpx

from .errors import (
    LinearAPIError,
    BadRequestError,
    map_status_code_to_error,
    RateLimitError,
    TransientError,
    RequestTimeoutError
)

# Type variable for generic function signatures
T = TypeVar('T')

logger = logging.getLogger(__name__)


def _parse_retry_after(response: Optional[httpx.Response]) -> Optional[float]:
    """Read the Retry-After header of a response, in seconds."""
    if response is None:
        return None

    header = response.headers.get('Retry-After') or response.headers.get('retry-after')
    if not header:
        return None

    try:
        return float(header)
    except (ValueError, TypeError):
        # HTTP-date form is not worth parsing here
        logger.warning(f"Could not parse Retry-After header: {header}")
        return 60.0


def handle_linear_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to map httpx and unexpected errors to LinearAPIError.

    Args:
        func: The async function to wrap

    Returns:
        Wrapped function with error handling

    Example:
        @handle_linear_error
        async def create_cycle(self, name, starts_at, ends_at, team_id):
            return await self._execute(CYCLE_CREATE, {...})
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except LinearAPIError:
            # Already a custom error, re-raise as-is
            raise
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            retry_after = _parse_retry_after(e.response) if status_code == 429 else None

            error = map_status_code_to_error(
                status_code,
                original_error=e,
                retry_after=retry_after
            )
            logger.error(f"Linear API error in {func.__name__}: {error}")
            raise error
        except httpx.TimeoutException as e:
            logger.error(f"Linear request timed out in {func.__name__}: {e}")
            raise TransientError(original_error=e)
        except httpx.TransportError as e:
            logger.error(f"Network error in {func.__name__}: {e}")
            raise TransientError(original_error=e)
        except ValueError as e:
            # Malformed JSON body
            logger.error(f"Invalid response in {func.__name__}: {e}")
            raise BadRequestError(
                message=f"Invalid response from Linear in {func.__name__}: {e}",
                original_error=e
            )
        except Exception as e:
            # Malformed payloads (missing entities) and anything else unexpected
            logger.error(f"Unexpected error in {func.__name__}: {e}")
            raise LinearAPIError(
                message=f"Unexpected error in {func.__name__}: {e}",
                original_error=e
            )

    return wrapper


def retry_on_transient_error(
    max_retries: int = 3,
    base_delay: float = 1.0,
    exponential_base: float = 2.0,
    max_delay: float = 60.0
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to retry operations on transient errors with exponential backoff.

    Automatically retries on:
    - Rate limit errors (429 / RATELIMITED)
    - Server and network errors (500, 502, 503, 504, connection failures)

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        exponential_base: Base for exponential backoff (default: 2.0)
        max_delay: Maximum delay between retries (default: 60.0)

    Returns:
        Decorator function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (RateLimitError, TransientError) as e:
                    if attempt >= max_retries:
                        logger.error(
                            f"Max retries ({max_retries}) exceeded for {func.__name__}"
                        )
                        raise

                    if isinstance(e, RateLimitError) and e.retry_after:
                        # Respect Retry-After header
                        delay = min(e.retry_after, max_delay)
                    else:
                        delay = min(
                            base_delay * (exponential_base ** attempt),
                            max_delay
                        )

                    logger.warning(
                        f"Transient error in {func.__name__} (attempt {attempt + 1}/{max_retries}): "
                        f"{e}. Retrying in {delay:.1f}s..."
                    )

                    await asyncio.sleep(delay)

        return wrapper
    return decorator


def with_timeout(timeout_seconds: float = 30) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to add timeout to async operations.

    Args:
        timeout_seconds: Timeout in seconds (default: 30)

    Returns:
        Decorator function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await asyncio.wait_for(
                    func(*args, **kwargs),
                    timeout=timeout_seconds
                )
            except asyncio.TimeoutError as e:
                logger.error(
                    f"Timeout after {timeout_seconds}s in {func.__name__}"
                )
                raise RequestTimeoutError(
                    timeout_seconds=timeout_seconds,
                    original_error=e
                )

        return wrapper
    return decorator


def log_execution(level: int = logging.INFO) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log calls, completions and failures of a coroutine.

    Args:
        level: Logging level (default: INFO)

    Returns:
        Decorator function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            func_name = func.__name__
            logger.log(level, f"Calling {func_name}")

            try:
                result = await func(*args, **kwargs)
                logger.log(level, f"{func_name} completed successfully")
                return result
            except Exception as e:
                logger.log(level, f"{func_name} failed with error: {e}")
                raise

        return wrapper
    return decorator


def linear_operation(
    timeout_seconds: float = 30,
    max_retries: int = 3,
    base_delay: float = 1.0
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Convenience decorator combining timeout, retry, and error handling.

    Applies decorators in this order:
    1. Retry on transient errors (outermost)
    2. Timeout, per attempt
    3. Error handling (innermost)

    Backoff sleeps, including Retry-After waits, are not counted against
    the timeout.

    Args:
        timeout_seconds: Timeout of a single attempt in seconds (default: 30)
        max_retries: Maximum retry attempts (default: 3)
        base_delay: Initial retry delay in seconds (default: 1.0)

    Returns:
        Decorator function

    Example:
        @linear_operation(timeout_seconds=60, max_retries=5)
        async def create_issue(self, title, ...):
            return await self._execute(ISSUE_CREATE, {...})
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        decorated = func
        decorated = handle_linear_error(decorated)
        decorated = with_timeout(timeout_seconds)(decorated)
        decorated = retry_on_transient_error(
            max_retries=max_retries,
            base_delay=base_delay
        )(decorated)
        return decorated

    return decorator


class PerformanceMonitor:
    """
    Async context manager timing one pipeline stage.

    Logs a warning when the stage exceeds its threshold.
    """

    def __init__(self, operation_name: str, warn_threshold_ms: float = 1000.0):
        self.operation_name = operation_name
        self.warn_threshold_ms = warn_threshold_ms
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    @property
    def duration_ms(self) -> Optional[float]:
        """Elapsed time in milliseconds, once the block has exited."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time) * 1000

    async def __aenter__(self):
        self.start_time = asyncio.get_running_loop().time()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.end_time = asyncio.get_running_loop().time()
        duration_ms = self.duration_ms

        if duration_ms > self.warn_threshold_ms:
            logger.warning(
                f"Slow stage: {self.operation_name} took {duration_ms:.1f}ms "
                f"(threshold: {self.warn_threshold_ms:.1f}ms)"
            )
        else:
            logger.debug(f"Stage {self.operation_name} completed in {duration_ms:.1f}ms")
