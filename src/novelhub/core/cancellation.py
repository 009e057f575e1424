"""Cancellation tokens for superseded requests.

A page that refetches on every filter change keeps one ``RequestTracker``.
Starting a new request cancels the token of the previous one, so a slow
response that lands late is recognised as stale and never overwrites
newer state.
"""

from __future__ import annotations


class CancellationToken:
    """Flag shared between a request and whoever may supersede it."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class RequestTracker:
    """Hands out tokens so only the most recent request stays live."""

    def __init__(self) -> None:
        self._current: CancellationToken | None = None

    @property
    def current(self) -> CancellationToken | None:
        return self._current

    def begin(self) -> CancellationToken:
        """Cancel the in-flight request, if any, and start a new one."""
        if self._current is not None:
            self._current.cancel()
        self._current = CancellationToken()
        return self._current

    def cancel(self) -> None:
        """Cancel whatever is in flight (page teardown)."""
        if self._current is not None:
            self._current.cancel()
            self._current = None
