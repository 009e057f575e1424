"""Async HTTP client for the NovelAI Hub REST API.

Wraps ``httpx.AsyncClient`` with:
- Bearer authentication sourced from the persisted session
- Mapping of HTTP error statuses to typed, human-readable errors
- Mapping of transport failures to ``NetworkError``

The API answers with a JSON envelope ``{"success", "data", "message"}``;
``request`` returns that envelope and leaves picking ``data`` to services.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from novelhub.core.exceptions import (
    InvalidResponseError,
    NetworkError,
    error_for_status,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]


class ApiClient:
    """Async client for the REST API.

    Args:
        base_url: API base URL, e.g. ``http://localhost:5000/api``
        token_provider: Returns the current bearer token, or None
        timeout: Request timeout in seconds
        transport: Custom httpx transport (tests mount a fake app here)

    Example:
        ```python
        client = ApiClient("http://localhost:5000/api", token_provider=store.get_token)
        async with client:
            payload = await client.get("/stories", params={"page": 1})
        ```
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ApiClient":
        """Support async context manager."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Close client on context exit."""
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for the current session, if there is one."""
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        authenticated: bool = False,
        status_messages: dict[int, str] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Make an HTTP request and decode the JSON envelope.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Endpoint path, joined with the base URL
            authenticated: Send the bearer token when one is available
            status_messages: Default error messages overriding the global table
            **kwargs: Passed through to ``httpx.AsyncClient.request``

        Returns:
            Decoded JSON object

        Raises:
            RequestError: The API answered with an error status
            NetworkError: The API could not be reached
            InvalidResponseError: The body of a 2xx response is not a JSON object
        """
        client = await self._get_client()
        headers = dict(kwargs.pop("headers", None) or {})
        if authenticated:
            headers.update(self.auth_headers())

        try:
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise NetworkError() from e

        payload = self._decode(response)

        if response.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise error_for_status(
                response.status_code,
                message=message if isinstance(message, str) else None,
                overrides=status_messages,
                retry_after=self._retry_after(response),
            )

        if not isinstance(payload, dict):
            raise InvalidResponseError()
        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _retry_after(response: httpx.Response) -> int | None:
        value = response.headers.get("Retry-After")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> dict[str, Any]:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> dict[str, Any]:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)
