"""Auth Service - account endpoints of the REST API.

Stateless wrapper: it sends requests and returns models. Persisting the
session is the job of ``AuthProvider``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from novelhub.api import endpoints
from novelhub.api.client import ApiClient
from novelhub.core.exceptions import InvalidResponseError, NovelHubError
from novelhub.models.upload import ImageUpload
from novelhub.models.user import User

from .validation import validate_image

logger = logging.getLogger(__name__)

AUTH_STATUS_MESSAGES = {
    401: "Authentication failed",
}


class AuthService:
    """Service for registration, login and profile management.

    Usage:
        service = AuthService(client)
        user = await service.login("ada@example.com", "secret1")
        # user.token is the bearer token to persist
    """

    def __init__(self, client: ApiClient):
        self.client = client

    async def _call(self, action: str, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return await self.client.request(
                method, path, status_messages=AUTH_STATUS_MESSAGES, **kwargs
            )
        except NovelHubError as e:
            logger.error(f"{action} error: {e}")
            raise

    @staticmethod
    def _user(data: Any, token: str | None = None) -> User:
        if not isinstance(data, dict):
            raise InvalidResponseError()
        if token is not None:
            data = {**data, "token": token}
        try:
            return User.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidResponseError() from e

    def _session_user(self, action: str, payload: dict[str, Any]) -> User:
        data = payload.get("data")
        if not isinstance(data, dict) or not data.get("token"):
            logger.error(f"{action} error: response carried no token")
            raise InvalidResponseError()
        return self._user(data)

    async def register(self, username: str, email: str, password: str) -> User:
        """Create an account; the returned user carries the session token."""
        payload = await self._call(
            "Registration",
            "POST",
            endpoints.REGISTER,
            json={"username": username, "email": email, "password": password},
        )
        return self._session_user("Registration", payload)

    async def login(self, email: str, password: str) -> User:
        """Sign in; the returned user carries the session token."""
        payload = await self._call(
            "Login",
            "POST",
            endpoints.LOGIN,
            json={"email": email, "password": password},
        )
        return self._session_user("Login", payload)

    async def get_profile(self) -> User:
        payload = await self._call("Get profile", "GET", endpoints.PROFILE, authenticated=True)
        return self._user(payload.get("data"))

    async def update_profile(self, **fields: Any) -> User:
        """Update profile fields.

        Args:
            **fields: Any of username, email, current_password, new_password.
                ``None`` values are not sent.
        """
        body = {
            _PROFILE_FIELDS.get(name, name): value
            for name, value in fields.items()
            if value is not None
        }
        payload = await self._call(
            "Update profile", "PUT", endpoints.PROFILE, authenticated=True, json=body
        )
        return self._user(payload.get("data"))

    async def upload_profile_picture(self, image: ImageUpload) -> str:
        """Upload a new profile picture and return its URL.

        The image is validated first; nothing is sent if it is rejected.
        """
        validate_image(image)
        payload = await self._call(
            "Upload profile picture",
            "POST",
            endpoints.PROFILE_PICTURE,
            authenticated=True,
            files={"image": image.as_file()},
        )
        data = payload.get("data")
        picture = data.get("profilePicture") if isinstance(data, dict) else None
        if not isinstance(picture, str) or not picture:
            raise InvalidResponseError()
        return picture

    async def forgot_password(self, email: str) -> str:
        payload = await self._call(
            "Forgot password", "POST", endpoints.FORGOT_PASSWORD, json={"email": email}
        )
        return payload.get("message") or ""

    async def reset_password(self, token: str, new_password: str) -> str:
        payload = await self._call(
            "Reset password",
            "POST",
            endpoints.RESET_PASSWORD,
            json={"token": token, "newPassword": new_password},
        )
        return payload.get("message") or ""


_PROFILE_FIELDS = {
    "current_password": "currentPassword",
    "new_password": "newPassword",
    "profile_picture": "profilePicture",
}
