"""Shared fixtures for the storefront-client test suite."""
from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from storefront_client.client import StorefrontClient
from storefront_client.config import BackendProfile, Config, Settings
from storefront_client.refresh import REFRESH_PATH
from storefront_client.store import SessionStore

STALE_TOKEN = "stale-token"
FRESH_TOKEN = "fresh-token"
REFRESH_TOKEN = "refresh-1"

CUSTOMER = {"email": "jane@example.com", "firstName": "Jane", "lastName": "Doe", "role": "customer"}
ADMIN = {"email": "root@example.com", "firstName": "Ada", "lastName": "Admin", "role": "admin"}


def envelope(data: Any = None, status: str = "success", code: int | None = 200, message: str = "OK") -> dict:
    return {"status": status, "code": code, "message": message, "data": data}


@dataclass
class Call:
    method: str
    path: str
    headers: dict[str, str]
    json: Any = None
    params: Any = None


@dataclass
class FakeBackend:
    """Stands in for httpx.AsyncClient.

    Protected paths answer 401 unless the request carries ``valid_token``.
    The refresh endpoint can be held open with ``refresh_gate`` so several
    requests pile up behind one refresh.
    """
    valid_token: str = FRESH_TOKEN
    refresh_response: tuple[int, Any] = field(
        default_factory=lambda: (200, envelope({"accessToken": FRESH_TOKEN}))
    )
    public_paths: set[str] = field(default_factory=lambda: {"/auth/sign-in", "/auth/sign-up"})
    routes: dict[tuple[str, str], tuple[int, Any]] = field(default_factory=dict)
    errors: dict[tuple[str, str], Exception] = field(default_factory=dict)
    refresh_gate: asyncio.Event | None = None
    calls: list[Call] = field(default_factory=list)

    def route(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, envelope() if body is None else body)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.errors[(method, path)] = exc

    async def request(self, method, url, headers=None, json=None, params=None) -> httpx.Response:
        path = httpx.URL(url).path
        headers = dict(headers or {})
        self.calls.append(Call(method, path, headers, json, params))
        await asyncio.sleep(0)

        if (method, path) in self.errors:
            raise self.errors[(method, path)]

        if path == REFRESH_PATH:
            if self.refresh_gate is not None:
                await self.refresh_gate.wait()
            status, body = self.refresh_response
            return httpx.Response(status, json=body)

        if path not in self.public_paths and headers.get("Authorization") != f"Bearer {self.valid_token}":
            return httpx.Response(401, json=envelope(status="error", code=401, message="Token expired"))

        status, body = self.routes.get((method, path), (200, envelope()))
        return httpx.Response(status, json=body)

    async def aclose(self) -> None:
        pass

    @property
    def refresh_calls(self) -> list[Call]:
        return [c for c in self.calls if c.path == REFRESH_PATH]

    def calls_to(self, path: str) -> list[Call]:
        return [c for c in self.calls if c.path == path]


@pytest.fixture
def backend_profile() -> BackendProfile:
    return BackendProfile(base_url="https://shop.test", login_path="/login")


@pytest.fixture
def fake_config(tmp_path, backend_profile) -> Config:
    return Config(
        settings=Settings(
            base_url="https://shop.test",
            default_backend="test",
            session_file=str(tmp_path / "session.json"),
            timeout=5.0,
        ),
        backends={"test": backend_profile},
    )


@pytest.fixture
def store(tmp_path) -> SessionStore:
    """Session store holding an expired access token and a valid refresh token."""
    s = SessionStore(tmp_path / "session.json")
    s.write_session(STALE_TOKEN, REFRESH_TOKEN, CUSTOMER)
    return s


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def logouts() -> list[str]:
    """Login paths the client was sent to."""
    return []


@pytest.fixture
def client(backend_profile, store, fake_backend, logouts) -> StorefrontClient:
    c = StorefrontClient(backend_profile, store, on_logout=logouts.append)
    c._http = fake_backend
    return c


@pytest.fixture
def mock_client():
    """MagicMock standing in for StorefrontClient in service tests."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.patch = AsyncMock()
    client.delete = AsyncMock()
    client.aclose = AsyncMock()
    return client


def stored_user(store: SessionStore) -> dict | None:
    raw = store.get("user")
    return json.loads(raw) if raw else None


def mock_build(service, admin: bool = True):
    """(client, service) pair for patching a command module's _build_client."""
    from storefront_client.models.auth import User

    client = MagicMock()
    client.aclose = AsyncMock()
    client.store.load_user.return_value = User(
        email="root@example.com", role="admin" if admin else "customer",
    )
    return client, service
