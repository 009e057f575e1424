"""Tests for session persistence and the auth provider."""

import json

import httpx
import pytest

from fake_api import BASE_URL
from novelhub.api.client import ApiClient
from novelhub.core.exceptions import UnauthorizedError
from novelhub.models.user import User
from novelhub.services.auth import AuthService
from novelhub.session.provider import AuthProvider
from novelhub.session.storage import FileStorage, MemoryStorage
from novelhub.session.store import SessionStore

ADA = User(id="u1", username="ada", email="ada@example.com")


class TestSessionStore:
    """Test the persisted token/user pair."""

    def test_empty(self, store: SessionStore) -> None:
        """Test no keys means logged out."""
        assert store.load() is None
        assert not store.is_valid()

    def test_save_and_load(self, store: SessionStore) -> None:
        """Test a saved pair loads back."""
        store.save("tok", ADA)
        session = store.load()
        assert session is not None
        assert session.token == "tok"
        assert session.user.username == "ada"
        assert store.get_token() == "tok"

    def test_save_is_single_write(self) -> None:
        """Test token and user are written together."""
        writes: list[dict] = []

        class Recording(MemoryStorage):
            def set_many(self, items):
                writes.append(dict(items))
                super().set_many(items)

        SessionStore(Recording()).save("tok", ADA)
        assert len(writes) == 1
        assert set(writes[0]) == {"token", "user"}

    def test_empty_token_rejected(self, store: SessionStore) -> None:
        """Test a session cannot be saved without a token."""
        with pytest.raises(ValueError):
            store.save("", ADA)

    @pytest.mark.parametrize(
        "contents",
        [
            {"token": "tok"},
            {"user": json.dumps({"_id": "u1"})},
            {"token": "tok", "user": "{not json"},
            {"token": "tok", "user": json.dumps({"_id": ""})},
            {"token": "tok", "user": json.dumps(["u1"])},
        ],
    )
    def test_invalid_pair_cleared(self, contents: dict) -> None:
        """Test partial or malformed sessions clear both keys, idempotently."""
        storage = MemoryStorage(contents)
        store = SessionStore(storage)
        assert store.load() is None
        assert storage.get("token") is None
        assert storage.get("user") is None
        assert store.load() is None

    def test_save_user_keeps_token(self, store: SessionStore) -> None:
        """Test replacing the cached user leaves the token alone."""
        store.save("tok", ADA)
        store.save_user(ADA.model_copy(update={"username": "countess"}))
        session = store.load()
        assert session is not None
        assert session.token == "tok"
        assert session.user.username == "countess"


class TestFileStorage:
    """Test the JSON file backend."""

    def test_round_trip(self, tmp_path) -> None:
        """Test values survive a new storage instance."""
        path = tmp_path / "nested" / "session.json"
        FileStorage(path).set_many({"token": "tok", "user": "{}"})
        assert FileStorage(path).get("token") == "tok"
        FileStorage(path).remove("token", "user")
        assert FileStorage(path).get("user") is None

    def test_corrupt_file_reads_empty(self, tmp_path) -> None:
        """Test an unreadable file is treated as no session."""
        path = tmp_path / "session.json"
        path.write_text("{broken", encoding="utf-8")
        store = SessionStore(FileStorage(path))
        assert store.load() is None
        store.save("tok", ADA)
        assert store.is_valid()


class TestAuthProvider:
    """Test session state transitions."""

    async def test_initialize_without_session(self, provider: AuthProvider) -> None:
        """Test a fresh start ends logged out and not loading."""
        assert provider.loading
        await provider.initialize()
        assert not provider.loading
        assert provider.current_user is None
        assert not provider.is_authenticated()

    async def test_initialize_revalidates(self, provider, signed_in, backend, ada) -> None:
        """Test a stored session is refreshed from the profile endpoint."""
        backend.users[ada[0]["_id"]]["username"] = "ada-renamed"
        await provider.initialize()
        assert provider.is_authenticated()
        assert provider.current_user.username == "ada-renamed"
        assert provider.store.load().user.username == "ada-renamed"
        assert provider.store.get_token() == ada[1]

    async def test_initialize_rejected_token(self, provider, signed_in, backend) -> None:
        """Test a session the server rejects is cleared."""
        backend.tokens.clear()
        await provider.initialize()
        assert provider.current_user is None
        assert not provider.has_session()

    async def test_initialize_offline_keeps_user(self, store, signed_in) -> None:
        """Test an unreachable API keeps the cached user."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        client = ApiClient(BASE_URL, transport=httpx.MockTransport(handler))
        provider = AuthProvider(store, AuthService(client))
        await provider.initialize()
        assert provider.current_user is not None
        assert provider.current_user.id == signed_in.id
        assert provider.is_authenticated()
        await client.close()

    async def test_login_persists_session(self, provider, ada) -> None:
        """Test login saves token and user and notifies listeners."""
        await provider.initialize()
        changes: list[bool] = []
        unsubscribe = provider.subscribe(lambda p: changes.append(p.loading))
        user = await provider.login("ada@example.com", "secret1")
        unsubscribe()
        assert provider.current_user == user
        assert provider.store.get_token() == user.token
        assert provider.is_authenticated()
        assert changes[0] is True and changes[-1] is False

    async def test_login_failure_sets_error(self, provider, ada) -> None:
        """Test a rejected login records the message and re-raises."""
        await provider.initialize()
        with pytest.raises(UnauthorizedError):
            await provider.login("ada@example.com", "wrong-password")
        assert provider.error == "Invalid email or password"
        assert not provider.loading
        assert not provider.has_session()
        provider.clear_error()
        assert provider.error is None

    async def test_register(self, provider, backend) -> None:
        """Test registration signs the new user in."""
        await provider.initialize()
        user = await provider.register("grace", "grace@example.com", "hopper1")
        assert user.token in backend.tokens
        assert provider.is_authenticated()

    async def test_logout(self, provider, signed_in) -> None:
        """Test logout clears memory and storage."""
        await provider.initialize()
        provider.logout()
        assert provider.current_user is None
        assert provider.store.load() is None
        assert not provider.is_authenticated()

    async def test_authenticated_needs_memory_user(self, provider, signed_in) -> None:
        """Test a persisted session alone is not enough."""
        provider.loading = False
        assert provider.has_session()
        assert not provider.is_authenticated()

    async def test_update_profile(self, provider, signed_in) -> None:
        """Test profile changes are persisted with the token kept."""
        await provider.initialize()
        user = await provider.update_profile(username="countess")
        assert user.username == "countess"
        assert provider.store.load().user.username == "countess"
        assert provider.store.get_token() == signed_in.token

    async def test_update_profile_without_token_logs_out(
        self, provider, signed_in, monkeypatch
    ) -> None:
        """Test a token removed from storage ends the session instead of crashing."""
        await provider.initialize()
        updated = provider.current_user.model_copy(update={"username": "countess"})

        async def update_profile(**fields):
            provider.store.storage.remove("token")
            return updated

        monkeypatch.setattr(provider.auth_service, "update_profile", update_profile)
        with pytest.raises(UnauthorizedError):
            await provider.update_profile(username="countess")
        assert provider.current_user is None
        assert not provider.has_session()
        assert not provider.loading
        assert provider.error == "Session expired - please log in again"

    async def test_refresh_user_unauthorized_logs_out(self, provider, signed_in, backend) -> None:
        """Test a 401 while refreshing ends the session."""
        await provider.initialize()
        backend.tokens.clear()
        assert await provider.refresh_user() is None
        assert provider.current_user is None
        assert not provider.has_session()
