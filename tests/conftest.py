"""Shared fixtures: isolated session store and a scripted backend client."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from matrimony.services.session_service import SessionStore


class FakeApiClient:
    """Stands in for MatrimonyApiClient, returning scripted envelopes."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def respond(self, method, envelope):
        self.responses[method] = envelope

    async def _reply(self, method, *args):
        self.calls.append((method, args))
        return self.responses.get(method, {"status": False, "message": "Network error or server unavailable"})

    async def login(self, email, password):
        return await self._reply("login", email, password)

    async def search_profiles(self, payload):
        return await self._reply("search_profiles", payload)

    async def get_profile(self, client_id):
        return await self._reply("get_profile", client_id)

    async def get_selected_profiles(self, client_id):
        return await self._reply("get_selected_profiles", client_id)

    async def get_dashboard_stats(self, client_id):
        return await self._reply("get_dashboard_stats", client_id)


@pytest.fixture
def store(tmp_path):
    return SessionStore(store_path=tmp_path / "session.json")


@pytest.fixture
def fake_api():
    return FakeApiClient()


@pytest.fixture
def client(monkeypatch, store, fake_api):
    from matrimony.main import app
    from matrimony.routers import auth, search, profiles, dashboard

    for module in (auth, search, profiles, dashboard):
        monkeypatch.setattr(module, "api_client", fake_api)
        monkeypatch.setattr(module, "session_store", store)

    return TestClient(app)


@pytest.fixture
def logged_in(store):
    user = {"tamil_client_id": "501", "client_id": "NM501", "m_id": "77", "user_name": "Priya"}
    asyncio.run(store.set_session(user))
    return user
