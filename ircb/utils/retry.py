"""Caller-side reconnect helper built on Tenacity.

The client itself never retries; applications that want to keep trying
wrap their connect call with ``connect_with_retry``.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import RETRY_MAX_ATTEMPTS, RETRY_MAX_WAIT
from ..errors.handling import is_retryable_error
from ..errors.internal import NetworkError
from ..logs.logger import logger

T = TypeVar("T")


class RetryableException(Exception):
    """Raised internally when an attempt reported failure."""


class RetryExhaustedError(NetworkError):
    """Exception raised when all connect attempts have been exhausted."""

    def __init__(self, message: str, attempts: int, final_exception: BaseException | None = None) -> None:
        super().__init__(message, data={"attempts": attempts})
        self.attempts = attempts
        self.final_exception = final_exception


async def connect_with_retry(
    factory: Callable[[], T],
    connect: Callable[[T], Awaitable[bool]],
    max_attempts: int = RETRY_MAX_ATTEMPTS,
    max_wait: float = RETRY_MAX_WAIT,
    multiplier: float = 1,
) -> T:
    """Build a fresh client per attempt until ``connect`` reports success.

    Session state does not survive a failed connection, so every attempt
    gets a new object from ``factory``.

    Args:
        factory: Creates a new client.
        connect: Coroutine function returning True once connected.
        max_attempts: Maximum number of attempts.
        max_wait: Upper bound of the exponential backoff, in seconds.
        multiplier: Backoff multiplier (0 disables waiting, useful in tests).

    Returns:
        The connected client.

    Raises:
        RetryExhaustedError: If every attempt failed.
    """

    def before_attempt(retry_state) -> None:
        logger.log_event(
            "retry", "attempt", level=logging.DEBUG, attempt=retry_state.attempt_number
        )

    async def attempt() -> T:
        client = factory()
        try:
            ok = await connect(client)
        except Exception as e:
            if is_retryable_error(e):
                raise RetryableException(str(e)) from e
            raise
        if not ok:
            raise RetryableException("connect reported failure")
        return client

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, max=max_wait),
        retry=retry_if_exception_type(RetryableException),
        before=before_attempt,
    )

    try:
        return await retrying(attempt)
    except RetryError as e:
        logger.log_event("retry", "exhausted", level=logging.ERROR, attempts=max_attempts)
        raise RetryExhaustedError(
            f"Connect failed after {max_attempts} attempts",
            attempts=max_attempts,
            final_exception=e.last_attempt.exception(),
        ) from e
