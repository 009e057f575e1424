"""Application shell.

Wires storage, HTTP client, services, the auth provider, the route guard
and the router, and opens pages on navigation.

Lifecycle:
    async with NovelHubApp() as app:
        nav = await app.navigate("/browse")
        await nav.page.set_filter("genre", "fantasy")
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from novelhub.api.client import ApiClient
from novelhub.core.config import Settings, get_settings
from novelhub.core.retry import RetryPolicy
from novelhub.pages import (
    AccountPage,
    BrowsePage,
    CreateStoryWizard,
    EditStoryPage,
    HomePage,
    LoginPage,
    MyStoriesPage,
    PageContext,
    PageController,
    ResetPasswordPage,
    SignupPage,
    ViewStoryPage,
    WriteStoryPage,
)
from novelhub.routing import GuardDecision, GuardState, Route, RouteGuard, Router, split_location
from novelhub.services import AuthService, StoryService
from novelhub.session import AuthProvider, FileStorage, SessionStorage, SessionStore

logger = logging.getLogger(__name__)

ROUTES = [
    Route("/", HomePage),
    Route("/login", LoginPage),
    Route("/signup", SignupPage),
    Route("/reset-password", ResetPasswordPage),
    Route("/browse", BrowsePage),
    Route("/create", CreateStoryWizard, protected=True),
    Route("/write", WriteStoryPage, protected=True),
    Route("/my-stories", MyStoriesPage, protected=True),
    Route("/account", AccountPage, protected=True),
    Route("/story/:id/edit", EditStoryPage, protected=True),
    Route("/story/:id", ViewStoryPage),
]


@dataclass(frozen=True)
class NavLink:
    label: str
    path: str


@dataclass
class Navigation:
    """Result of opening a location.

    ``page`` is None when the path is unknown (``not_found``) or the guard
    did not let the page render (see ``decision``).
    """

    path: str
    page: PageController | None = None
    decision: GuardDecision | None = None
    params: dict[str, str] = field(default_factory=dict)
    not_found: bool = False


class NovelHubApp:
    """Client application.

    Args:
        settings: Defaults to the environment-driven settings
        storage: Session storage; defaults to a JSON file under the home dir
        transport: httpx transport for the API client (tests mount a fake API)
        sleep: Sleep used by the guard's retry delay
    """

    def __init__(
        self,
        settings: Settings | None = None,
        storage: SessionStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        self.settings = settings or get_settings()
        logging.getLogger("novelhub").setLevel(self.settings.log_level.upper())

        self.store = SessionStore(storage or FileStorage(self.settings.session_file))
        self.client = ApiClient(
            self.settings.effective_api_base_url,
            token_provider=self.store.get_token,
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )
        self.auth_service = AuthService(self.client)
        self.stories = StoryService(self.client)
        self.auth = AuthProvider(
            self.store, self.auth_service, revalidate=self.settings.revalidate_session
        )
        self.guard = RouteGuard(
            self.auth,
            RetryPolicy(
                max_attempts=self.settings.guard_max_attempts,
                delay_seconds=self.settings.guard_retry_delay_seconds,
                sleep=sleep,
            ),
        )
        self.router = Router(ROUTES)
        self.current: Navigation | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def startup(self) -> None:
        logger.info(f"Starting {self.settings.app_name} v{self.settings.app_version}")
        await self.auth.initialize()

    async def shutdown(self) -> None:
        logger.info("Shutting down...")
        self._close_page()
        await self.auth.teardown()
        await self.client.close()

    async def __aenter__(self) -> "NovelHubApp":
        await self.startup()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.shutdown()

    # =========================================================================
    # Navigation
    # =========================================================================

    def _close_page(self) -> None:
        if self.current is not None and self.current.page is not None:
            self.current.page.teardown()
        self.current = None

    def _context(
        self, params: dict[str, str], query: dict[str, str], state: dict[str, Any] | None
    ) -> PageContext:
        return PageContext(
            auth=self.auth,
            stories=self.stories,
            auth_service=self.auth_service,
            settings=self.settings,
            params=params,
            query=query,
            state=dict(state or {}),
        )

    async def navigate(self, location: str, state: dict[str, Any] | None = None) -> Navigation:
        """Open ``location`` (path plus optional query string).

        Protected routes are guarded; an unauthenticated visitor lands on
        login, which remembers the requested path.
        """
        path, query = split_location(location)
        self._close_page()

        match = self.router.match(path)
        if match is None:
            logger.info(f"No route for {path}")
            self.current = Navigation(path, not_found=True)
            return self.current

        route, params = match
        decision: GuardDecision | None = None
        if route.protected:
            decision = await self.guard.resolve(path)
            if decision.state is GuardState.UNAUTHENTICATED and decision.redirect:
                logger.info(f"Redirecting to {decision.redirect.to} from {path}")
                return await self.navigate(
                    decision.redirect.to, state={"from": decision.redirect.from_path}
                )
            if not decision.allowed:
                self.current = Navigation(path, decision=decision, params=params)
                return self.current

        page = route.page(self._context(params, query, state))
        self.current = Navigation(path, page=page, decision=decision, params=params)
        await page.load()
        return self.current

    async def follow(self, page: PageController) -> Navigation | None:
        """Navigate to where ``page`` asked to go, if anywhere."""
        if not page.next_path:
            return None
        path, page.next_path = page.next_path, None
        return await self.navigate(path)

    def nav_links(self) -> list[NavLink]:
        if self.auth.is_authenticated():
            return [
                NavLink("Browse", "/browse"),
                NavLink("My Stories", "/my-stories"),
                NavLink("Write", "/write"),
                NavLink("Create (AI)", "/create"),
                NavLink("Account", "/account"),
            ]
        return [
            NavLink("Browse", "/browse"),
            NavLink("Login", "/login"),
            NavLink("Sign Up", "/signup"),
        ]
