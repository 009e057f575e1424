"""Bounded retry with a fixed delay.

Used at resource-loading boundaries where a value may not be available yet,
such as the route guard waiting for the signed-in user's profile.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import NovelHubError, RetryExhaustedError

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class RetryOutcome(Generic[T]):
    """Value produced by a successful attempt."""

    value: T
    attempts: int


class RetryPolicy:
    """Retry an async operation a fixed number of times.

    An attempt fails when the operation returns ``None`` or raises one of
    ``retry_on``. Any other exception propagates immediately.

    Args:
        max_attempts: Total attempts, including the first
        delay_seconds: Fixed wait between failed attempts
        retry_on: Exception types counted as a failed attempt
        sleep: Awaitable sleep function (swapped out in tests)

    Example:
        ```python
        policy = RetryPolicy(max_attempts=3, delay_seconds=1.0)
        outcome = await policy.run(auth.refresh_user)
        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 1.0,
        retry_on: tuple[type[Exception], ...] = (NovelHubError,),
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.retry_on = retry_on
        self._sleep = sleep or asyncio.sleep

    async def run(self, operation: Callable[[], Awaitable[T | None]]) -> RetryOutcome[T]:
        """Run ``operation`` until it yields a value.

        Raises:
            RetryExhaustedError: If every attempt failed
        """
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                value = await operation()
            except self.retry_on as e:
                last_error = e
                logger.debug(f"Attempt {attempt}/{self.max_attempts} failed: {e}")
            else:
                if value is not None:
                    return RetryOutcome(value=value, attempts=attempt)
                logger.debug(f"Attempt {attempt}/{self.max_attempts} returned nothing")

            if attempt < self.max_attempts:
                await self._sleep(self.delay_seconds)

        raise RetryExhaustedError(self.max_attempts, last_error)
