import asyncio
from typing import Awaitable, Callable, TypeVar

from tenacity import AsyncRetrying, stop_after_attempt, wait_fixed

from tools.logger import get_logger

logger = get_logger("Retry")

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_MS = 2000


def _log_transient(label, max_attempts):
    def before_sleep(retry_state):
        exc = retry_state.outcome.exception()
        logger.warning(
            f"Retry {retry_state.attempt_number}/{max_attempts} failed for {label}: {exc}. Retrying..."
        )
    return before_sleep


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay_ms: float = DEFAULT_DELAY_MS,
    label: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run an async operation, retrying it as a whole on any exception.

    Attempts are strictly sequential with a fixed delay between them. Only the
    last attempt's exception escapes, unchanged; earlier ones are just logged.
    max_attempts=1 means no retry.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(delay_ms / 1000),
        before_sleep=_log_transient(label, max_attempts),
        reraise=True,
        sleep=sleep,
    )
    return await retrying(operation)
