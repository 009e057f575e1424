"""Session/Auth Provider.

Owns the signed-in state shared by every page: the current user, a loading
flag and the last auth error. It is the only writer of the session store.

Lifecycle:
    provider = AuthProvider(store, auth_service)
    await provider.initialize()     # restore (and re-validate) the session
    ...
    await provider.teardown()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from novelhub.core.exceptions import (
    InvalidResponseError,
    NetworkError,
    NovelHubError,
    RequestError,
    UnauthorizedError,
)
from novelhub.models.upload import ImageUpload
from novelhub.models.user import User
from novelhub.services.auth import AuthService

from .store import SessionStore

logger = logging.getLogger(__name__)

Listener = Callable[["AuthProvider"], None]


class AuthProvider:
    """Injectable session state with the auth operations that change it.

    Args:
        store: Persisted session
        auth_service: Account endpoints
        revalidate: Check a restored session against the profile endpoint
    """

    def __init__(self, store: SessionStore, auth_service: AuthService, revalidate: bool = True):
        self.store = store
        self.auth_service = auth_service
        self.revalidate = revalidate
        self.current_user: User | None = None
        self.loading = True
        self.error: str | None = None
        self._listeners: list[Listener] = []

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self._notify()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def initialize(self) -> None:
        """Restore the persisted session, optionally re-validating it."""
        self._set(loading=True)
        session = self.store.load()
        if session is None:
            self._set(current_user=None, loading=False)
            return

        user = session.user
        if self.revalidate:
            try:
                fresh = await self.auth_service.get_profile()
            except NetworkError as e:
                logger.warning(f"Could not re-validate session, keeping cached user: {e}")
            except (RequestError, InvalidResponseError) as e:
                logger.info(f"Stored session rejected, signing out: {e}")
                self.store.clear()
                self._set(current_user=None, loading=False)
                return
            else:
                user = fresh.model_copy(update={"token": session.token})
                self.store.save_user(user)

        logger.info(f"Session restored for user {user.id}")
        self._set(current_user=user, loading=False)

    async def teardown(self) -> None:
        self._listeners.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    def has_session(self) -> bool:
        """Token and persisted user are both present and well-formed."""
        return self.store.is_valid()

    def is_authenticated(self) -> bool:
        """Persisted session is valid and the user is loaded in memory."""
        return self.current_user is not None and self.has_session()

    def clear_error(self) -> None:
        self._set(error=None)

    # =========================================================================
    # Operations
    # =========================================================================

    async def _sign_in(self, action: str, call: Any) -> User:
        self._set(error=None, loading=True)
        try:
            user = await call
        except NovelHubError as e:
            self._set(error=e.message, loading=False)
            raise
        self.store.save(user.token or "", user)
        logger.info(f"{action} succeeded for user {user.id}")
        self._set(current_user=user, loading=False)
        return user

    async def register(self, username: str, email: str, password: str) -> User:
        return await self._sign_in(
            "Registration", self.auth_service.register(username, email, password)
        )

    async def login(self, email: str, password: str) -> User:
        return await self._sign_in("Login", self.auth_service.login(email, password))

    def logout(self) -> None:
        """Forget the session. Never touches the network."""
        self.store.clear()
        logger.info("Signed out")
        self._set(current_user=None, error=None)

    def _keep_user(self, user: User) -> None:
        """Persist ``user`` next to the stored token.

        Raises:
            UnauthorizedError: The token vanished from storage; the session is
                ended instead.
        """
        if self.store.get_token() is None:
            logger.info("Session token missing from storage, signing out")
            self.logout()
            error = UnauthorizedError("Session expired - please log in again")
            self._set(error=error.message, loading=False)
            raise error
        self.store.save_user(user)

    async def update_profile(self, **fields: Any) -> User:
        self._set(error=None, loading=True)
        try:
            updated = await self.auth_service.update_profile(**fields)
        except NovelHubError as e:
            self._set(error=e.message, loading=False)
            raise
        user = updated.model_copy(update={"token": self.store.get_token()})
        self._keep_user(user)
        self._set(current_user=user, loading=False)
        return user

    async def update_profile_picture(self, image: ImageUpload) -> str:
        self._set(error=None, loading=True)
        try:
            picture = await self.auth_service.upload_profile_picture(image)
        except NovelHubError as e:
            self._set(error=e.message, loading=False)
            raise
        if self.current_user is not None:
            user = self.current_user.model_copy(update={"profile_picture": picture})
            self._keep_user(user)
            self._set(current_user=user, loading=False)
        else:
            self._set(loading=False)
        return picture

    async def refresh_user(self) -> User | None:
        """Load the profile for the persisted token.

        Returns the user, or None if there is no session or it could not be
        loaded. A 401 ends the session.
        """
        session = self.store.load()
        if session is None:
            if self.current_user is not None:
                self._set(current_user=None)
            return None
        try:
            fresh = await self.auth_service.get_profile()
        except UnauthorizedError:
            self.logout()
            return None
        except NovelHubError as e:
            logger.warning(f"Could not load user profile: {e}")
            return None

        user = fresh.model_copy(update={"token": session.token})
        self.store.save_user(user)
        self._set(current_user=user)
        return user
