"""Result-or-error wrapper for awaited requests."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .cancellation import CancellationToken
from .exceptions import NovelHubError

T = TypeVar("T")


@dataclass
class RequestResult(Generic[T]):
    """Outcome of one request: a value, an error, or stale."""

    value: T | None = None
    error: NovelHubError | None = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.superseded

    @classmethod
    def success(cls, value: T) -> "RequestResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NovelHubError) -> "RequestResult[T]":
        return cls(error=error)

    @classmethod
    def stale(cls) -> "RequestResult[T]":
        return cls(superseded=True)

    def unwrap(self) -> T | None:
        """Return the value, re-raising the error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value


async def attempt(
    operation: Awaitable[T],
    token: CancellationToken | None = None,
) -> RequestResult[T]:
    """Await ``operation`` and capture its outcome.

    Errors outside the ``NovelHubError`` hierarchy propagate. If ``token``
    was cancelled while the request was in flight the result is stale,
    whether it succeeded or not.
    """
    try:
        value = await operation
    except NovelHubError as e:
        if token is not None and token.cancelled:
            return RequestResult.stale()
        return RequestResult.failure(e)

    if token is not None and token.cancelled:
        return RequestResult.stale()
    return RequestResult.success(value)
