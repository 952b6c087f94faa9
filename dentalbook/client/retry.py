"""Retry-with-backoff for calls into the appointment store.

Pattern: tenacity AsyncRetrying with exponential wait (2s, 4s, 8s ...) that
only retries transient failures and re-raises the last error unchanged.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from dentalbook.client.errors import ErrorKind, OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_MARKERS = (
    "installing",
    "network",
    "timeout",
    "connection",
    "not ready",
    "initializing",
)


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide whether a failure is worth retrying.

    A structured `kind` on the error wins. Without one, the message is
    searched case-insensitively for TRANSIENT_MARKERS.
    """
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind == ErrorKind.TRANSIENT

    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


def backoff_delay(attempt: int) -> int:
    """Seconds to wait before retry number `attempt` (1-based)."""
    return 2 ** attempt


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    timeout: Optional[float] = None,
    on_retry: Optional[Callable[[int, BaseException], None]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run `operation`, retrying transient failures.

    Args:
        operation: zero-argument coroutine function
        max_retries: total number of attempts (default: 3)
        timeout: optional per-attempt timeout in seconds; expiry raises
                 OperationTimeoutError, which is itself retryable
        on_retry: called with (attempt, error) before each backoff wait
        sleep: coroutine used for the backoff wait

    Returns:
        The first successful result.

    Raises:
        The error of the last attempt, or the first non-transient error.
    """

    async def attempt_once() -> T:
        if timeout is None:
            return await operation()
        try:
            return await asyncio.wait_for(operation(), timeout=timeout)
        except asyncio.TimeoutError:
            raise OperationTimeoutError(timeout) from None

    def before_sleep(retry_state: RetryCallState) -> None:
        attempt = retry_state.attempt_number
        error = retry_state.outcome.exception()
        logger.warning(
            f"Attempt {attempt} of {max_retries} failed with a transient error, "
            f"retrying in {backoff_delay(attempt)}s: {error}"
        )
        if on_retry is not None:
            on_retry(attempt, error)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait_exponential(multiplier=2, exp_base=2),
        retry=retry_if_exception(is_retryable_error),
        before_sleep=before_sleep,
        sleep=sleep,
        reraise=True,
    )
    return await retrying(attempt_once)
