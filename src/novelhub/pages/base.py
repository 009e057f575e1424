"""Base classes for page controllers.

A page controller holds the local state a screen renders (form fields,
loading flags, a dismissible error, a success notice) and the actions a
user can take. Requests go through ``_call`` so that:

- service errors become a message on the page instead of an exception
- a newer request of the same kind makes an older in-flight one stale
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from novelhub.core.cancellation import RequestTracker
from novelhub.core.config import Settings
from novelhub.core.result import RequestResult, attempt
from novelhub.models.user import User
from novelhub.services.auth import AuthService
from novelhub.services.stories import StoryService
from novelhub.session.provider import AuthProvider

T = TypeVar("T")


@dataclass
class PageContext:
    """Everything a page may use, handed over by the app shell."""

    auth: AuthProvider
    stories: StoryService
    auth_service: AuthService
    settings: Settings
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)


class PageController:
    """Common state and request handling for every page."""

    heading: ClassVar[str] = ""

    def __init__(self, context: PageContext):
        self.context = context
        self.loading = False
        self.error: str | None = None
        self.success: str | None = None
        self.next_path: str | None = None
        self._requests = RequestTracker()

    @property
    def current_user(self) -> User | None:
        return self.context.auth.current_user

    async def load(self) -> None:
        """Fetch whatever the page shows when it is opened."""

    def teardown(self) -> None:
        """Page closed: anything still in flight becomes stale."""
        self._requests.cancel()

    def dismiss_error(self) -> None:
        self.error = None

    def go(self, path: str) -> None:
        """Ask the shell to navigate to ``path``."""
        self.next_path = path

    async def _call(
        self,
        operation: Awaitable[T],
        error_message: str | None = None,
        tracker: RequestTracker | None = None,
        loading_attr: str = "loading",
    ) -> RequestResult[T]:
        """Run a request, recording loading state and any error message.

        Args:
            operation: Service call to await
            error_message: Shown instead of the service's own message
            tracker: Supersession group; defaults to the page's main one
            loading_attr: Flag raised while the request is in flight
        """
        token = (tracker or self._requests).begin()
        setattr(self, loading_attr, True)
        result = await attempt(operation, token)
        if result.superseded:
            return result

        setattr(self, loading_attr, False)
        if result.error is not None:
            self.error = error_message or result.error.message
        return result


class FormPage(PageController):
    """Page with a flat form; editing a field clears the visible error."""

    fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, context: PageContext):
        super().__init__(context)
        self.form: dict[str, str] = {name: "" for name in self.fields}

    def update(self, name: str, value: str) -> None:
        if name not in self.form:
            raise KeyError(f"Unknown field: {name}")
        self.form[name] = value
        self.error = None
        self._on_change(name, value)

    def _on_change(self, name: str, value: str) -> None:
        """Hook for derived state such as a live word count."""
