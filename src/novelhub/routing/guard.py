"""Route guard for pages that require a signed-in user.

States:
    LOADING          session not resolved yet
    AUTHENTICATED    render the page
    UNAUTHENTICATED  redirect to login, remembering the requested path
    DEGRADED         session exists but the user could not be loaded after
                     the bounded retry; offer retry or login again
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from novelhub.core.exceptions import RetryExhaustedError
from novelhub.core.retry import RetryPolicy
from novelhub.models.user import User
from novelhub.session.provider import AuthProvider

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
DEGRADED_MESSAGE = "Failed to load user data. Please try logging in again."


class GuardState(str, Enum):
    """Outcome of guarding a route."""

    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class Redirect:
    """Navigate to ``to``; ``from_path`` is where to return afterwards."""

    to: str
    from_path: str | None = None

    @property
    def location(self) -> str:
        if not self.from_path:
            return self.to
        return f"{self.to}?{urlencode({'redirect': self.from_path})}"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    path: str
    redirect: Redirect | None = None
    message: str | None = None
    attempts: int = 0

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.AUTHENTICATED


class _SessionEnded(Exception):
    """The session disappeared while waiting for the user."""


class RouteGuard:
    """Decides whether a protected path may render.

    Args:
        auth: Shared session state
        retry_policy: Bounded retry used while the user is missing
        login_path: Where unauthenticated visitors are sent
    """

    def __init__(
        self,
        auth: AuthProvider,
        retry_policy: RetryPolicy | None = None,
        login_path: str = LOGIN_PATH,
    ):
        self.auth = auth
        self.retry_policy = retry_policy or RetryPolicy(max_attempts=3, delay_seconds=1.0)
        self.login_path = login_path

    def login_redirect(self, path: str) -> Redirect:
        return Redirect(to=self.login_path, from_path=path)

    def _unauthenticated(self, path: str, attempts: int = 0) -> GuardDecision:
        return GuardDecision(
            GuardState.UNAUTHENTICATED,
            path,
            redirect=self.login_redirect(path),
            attempts=attempts,
        )

    def evaluate(self, path: str) -> GuardDecision:
        """Snapshot decision, without waiting or fetching anything."""
        if self.auth.loading:
            return GuardDecision(GuardState.LOADING, path)
        if not self.auth.has_session():
            return self._unauthenticated(path)
        if self.auth.current_user is not None:
            return GuardDecision(GuardState.AUTHENTICATED, path)
        return GuardDecision(GuardState.LOADING, path)

    async def resolve(self, path: str) -> GuardDecision:
        """Settle the decision, retrying while the user is still missing."""
        decision = self.evaluate(path)
        if decision.state is not GuardState.LOADING:
            return decision

        async def load_user() -> User | None:
            if self.auth.current_user is not None:
                return self.auth.current_user
            if self.auth.loading:
                return None
            if not self.auth.has_session():
                raise _SessionEnded()
            return await self.auth.refresh_user()

        try:
            outcome = await self.retry_policy.run(load_user)
        except _SessionEnded:
            return self._unauthenticated(path)
        except RetryExhaustedError as e:
            if not self.auth.loading and not self.auth.has_session():
                return self._unauthenticated(path, attempts=e.attempts)
            logger.warning(f"User data unavailable for {path} after {e.attempts} attempts")
            return GuardDecision(
                GuardState.DEGRADED,
                path,
                redirect=self.login_redirect(path),
                message=DEGRADED_MESSAGE,
                attempts=e.attempts,
            )

        return GuardDecision(GuardState.AUTHENTICATED, path, attempts=outcome.attempts)

    async def retry(self, path: str) -> GuardDecision:
        """DEGRADED affordance: start the bounded retry over."""
        return await self.resolve(path)
