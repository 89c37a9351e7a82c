"""
tests.conftest

Shared fixtures.

Responsibilities:
- Scripted credential store (httpx MockTransport) for session-core unit tests.
- A real development credential store (FastAPI app + temp SQLite DB) for end-to-end tests.
- Wire payload builders for each role.
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from tiffin_session.credential_store.app import create_app
from tiffin_session.credentials.client import CredentialStoreClient
from tiffin_session.credentials.token_store import MemoryTokenStore
from tiffin_session.session.controller import SessionController
from tiffin_session.session.navigation import HistoryNavigator
from tiffin_session.settings import Settings

STORE_BASE_URL = "http://store.test/api"


def customer_payload(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "cust-1",
        "name": "Asha",
        "email": "asha@example.com",
        "phone": "555-0101",
        "role": "customer",
        "address": "12 Curry Lane",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
        "preferences": {"dietaryRestrictions": ["vegetarian"], "spiceLevel": "medium"},
    }
    data.update(overrides)
    return data


def chef_payload(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "chef-1",
        "name": "Ravi",
        "email": "ravi@example.com",
        "phone": "555-0202",
        "role": "chef",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
        "kitchenName": "Ravi's Kitchen",
        "kitchenAddress": "4 Spice Road",
        "specialties": ["North Indian", "Biryani"],
        "experience": 6,
        "maxOrdersPerDay": 40,
        "deliveryRadius": 5.5,
        "rating": 4.5,
        "totalOrders": 120,
        "isVerified": True,
    }
    data.update(overrides)
    return data


Responder = Callable[[httpx.Request], Any]


class FakeCredentialStore:
    """
    Scripted `/api/auth/*` endpoints. Unscripted routes answer 404.
    Every request is recorded in `requests`.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, f"/api{path}")] = lambda _request: httpx.Response(status, json=json)

    def handle(self, method: str, path: str, responder: Responder) -> None:
        # `responder` may be sync or async and may raise httpx errors.
        self.routes[(method, f"/api{path}")] = responder

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == f"/api{path}"]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, json={"message": "Not found"})
        result = responder(request)
        if inspect.isawaitable(result):
            result = await result
        return result


@pytest.fixture
def fake_store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest_asyncio.fixture
async def http(fake_store: FakeCredentialStore) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_store), base_url=STORE_BASE_URL
    ) as client:
        yield client


@pytest.fixture
def tokens() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def navigator() -> HistoryNavigator:
    return HistoryNavigator()


@pytest.fixture
def controller(
    http: httpx.AsyncClient, tokens: MemoryTokenStore, navigator: HistoryNavigator
) -> SessionController:
    return SessionController(
        client=CredentialStoreClient(http=http), tokens=tokens, navigator=navigator
    )


@pytest.fixture
def store_settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        api_base_url=STORE_BASE_URL,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'store.db'}",
        jwt_secret="test-secret",
        # Minimum bcrypt cost keeps the suite fast.
        password_hash_rounds=4,
    )


@pytest_asyncio.fixture
async def store_app(store_settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=store_settings)
    # ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def store_client(store_app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=store_app)
    async with httpx.AsyncClient(transport=transport, base_url=STORE_BASE_URL) as client:
        yield client


# --- Module Notes -----------------------------------------------------------
# Payload builders are plain functions so test modules can import them directly
# (`from conftest import chef_payload`).
