"""Shared fixtures: a fake REST API mounted on the client's transport."""

import httpx
import pytest

from fake_api import BASE_URL, FakeBackend, create_fake_api
from novelhub.api.client import ApiClient
from novelhub.app import NovelHubApp
from novelhub.core.config import Settings
from novelhub.models.user import User
from novelhub.services.auth import AuthService
from novelhub.services.stories import StoryService
from novelhub.session.provider import AuthProvider
from novelhub.session.storage import MemoryStorage
from novelhub.session.store import SessionStore


class SleepRecorder:
    """Stands in for ``asyncio.sleep`` and remembers the delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def transport(backend: FakeBackend) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_fake_api(backend))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_base_url=BASE_URL,
        session_file=tmp_path / "session.json",
        guard_retry_delay_seconds=1.0,
        _env_file=None,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
async def client(transport, store):
    api = ApiClient(BASE_URL, token_provider=store.get_token, transport=transport)
    yield api
    await api.close()


@pytest.fixture
def auth_service(client: ApiClient) -> AuthService:
    return AuthService(client)


@pytest.fixture
def story_service(client: ApiClient) -> StoryService:
    return StoryService(client)


@pytest.fixture
def provider(store: SessionStore, auth_service: AuthService) -> AuthProvider:
    return AuthProvider(store, auth_service)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def ada(backend: FakeBackend) -> tuple[dict, str]:
    """A registered user and a valid token."""
    return backend.add_user("ada", "ada@example.com", "secret1")


@pytest.fixture
def signed_in(store: SessionStore, ada: tuple[dict, str]) -> User:
    """Session for ada persisted by an earlier login."""
    data, token = ada
    user = User(id=data["_id"], username=data["username"], email=data["email"], token=token)
    store.save(token, user)
    return user


@pytest.fixture
async def app(settings, storage, transport, sleep):
    hub = NovelHubApp(settings=settings, storage=storage, transport=transport, sleep=sleep)
    await hub.startup()
    yield hub
    await hub.shutdown()


@pytest.fixture
async def member_app(signed_in, settings, storage, transport, sleep):
    """App started with ada's session already persisted."""
    hub = NovelHubApp(settings=settings, storage=storage, transport=transport, sleep=sleep)
    await hub.startup()
    yield hub
    await hub.shutdown()
