"""Persisted session: bearer token plus cached user.

The pair is only meaningful together. A token without a user, a user
without a token, or a user blob that no longer parses is treated as logged
out and both keys are removed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from novelhub.models.user import User

from .storage import SessionStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass(frozen=True)
class Session:
    """Token and cached user of the signed-in account."""

    token: str
    user: User


class SessionStore:
    """Reads and writes the persisted session.

    Only ``AuthProvider`` writes through the store; everything else reads
    snapshots with ``load`` or ``get_token``.

    Args:
        storage: Backend holding the ``token`` and ``user`` keys
    """

    def __init__(self, storage: SessionStorage):
        self.storage = storage

    def load(self) -> Session | None:
        """Return the persisted session, clearing it if it is not valid."""
        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)

        if not token and not raw_user:
            return None
        if not token or not raw_user:
            logger.info("Clearing partial session")
            self.clear()
            return None

        try:
            user = User.model_validate(json.loads(raw_user))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning(f"Clearing malformed session user: {e}")
            self.clear()
            return None

        return Session(token=token, user=user)

    def save(self, token: str, user: User) -> None:
        """Persist token and user in a single write."""
        if not token:
            raise ValueError("token must not be empty")
        self.storage.set_many({TOKEN_KEY: token, USER_KEY: self._dump(user)})

    def save_user(self, user: User) -> None:
        """Replace the cached user, keeping the token."""
        if not self.storage.get(TOKEN_KEY):
            raise ValueError("cannot save a user without a session token")
        self.storage.set_many({USER_KEY: self._dump(user)})

    def clear(self) -> None:
        self.storage.remove(TOKEN_KEY, USER_KEY)

    def get_token(self) -> str | None:
        return self.storage.get(TOKEN_KEY) or None

    def is_valid(self) -> bool:
        return self.load() is not None

    @staticmethod
    def _dump(user: User) -> str:
        return json.dumps(user.model_dump(by_alias=True, mode="json"))
