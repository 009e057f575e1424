"""NovelAI Hub - client for a story-sharing platform with AI generation.

Readers browse and like stories; writers publish their own or have one
generated from a prompt.

Quick Start:
    from novelhub import NovelHubApp

    async with NovelHubApp() as app:
        nav = await app.navigate("/login")
        nav.page.update("email", "ada@example.com")
        nav.page.update("password", "secret1")
        await nav.page.submit()
        nav = await app.follow(nav.page)

Layers:
    1. api       - httpx client, endpoints and error mapping
    2. services  - auth and story operations with client-side validation
    3. session   - persisted token/user and the auth provider
    4. routing   - router and the route guard with bounded retry
    5. pages     - per-screen state and actions
"""

__version__ = "0.1.0"

from novelhub.app import Navigation, NavLink, NovelHubApp
from novelhub.core import NovelHubError, Settings, get_settings
from novelhub.services import AuthService, StoryService
from novelhub.session import AuthProvider, SessionStore

__all__ = [
    # Version
    "__version__",
    # Application
    "NovelHubApp",
    "Navigation",
    "NavLink",
    # Config and errors
    "Settings",
    "get_settings",
    "NovelHubError",
    # Building blocks
    "AuthService",
    "StoryService",
    "AuthProvider",
    "SessionStore",
]
