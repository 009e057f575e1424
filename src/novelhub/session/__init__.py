"""Session persistence and the auth provider."""

from .provider import AuthProvider
from .storage import FileStorage, MemoryStorage, SessionStorage
from .store import Session, SessionStore

__all__ = [
    "AuthProvider",
    "Session",
    "SessionStore",
    "SessionStorage",
    "MemoryStorage",
    "FileStorage",
]
