"""Pytest configuration and fixtures for the catalog API tests."""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool

from lyrics_api.api.dependencies import (
    get_asset_store,
    get_challenge_verifier,
    get_view_rate_gate,
)
from lyrics_api.db import get_session
from lyrics_api.db.session import build_engine, init_db
from lyrics_api.main import create_app
from lyrics_api.repositories.rate_limits import InMemoryRateGate
from lyrics_api.services.assets import StaticAssetStore


class StubVerifier:
    """Challenge verifier that answers from a fixed verdict, never the network."""

    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        self.calls.append((token, remote_ip))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def db_engine(tmp_path):
    """File-backed SQLite so every event loop gets its own fresh connection."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool)
    asyncio.run(init_db(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def rate_gate():
    return InMemoryRateGate(window_seconds=3600, max_entries=5000)


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "songview.html").write_text("<h1>song shell</h1>")
    (root / "artistview.html").write_text("<h1>artist shell</h1>")
    (root / "404.html").write_text("<h1>missing</h1>")
    return root


@pytest.fixture
def app(session_factory, verifier, rate_gate, static_root):
    application = create_app()

    async def _session():
        async with session_factory() as session:
            yield session

    store = StaticAssetStore(static_root, not_found_page="/404.html", cache_max_age=3600)
    application.dependency_overrides[get_session] = _session
    application.dependency_overrides[get_challenge_verifier] = lambda: verifier
    application.dependency_overrides[get_view_rate_gate] = lambda: rate_gate
    application.dependency_overrides[get_asset_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def create_song(client):
    """Create a song through the admin API and return the response body."""

    def _create(title: str = "Test Song", lyrics: str = "Line one\nLine two", **extra):
        response = client.post("/api/admin/songs", json={"title": title, "lyrics": lyrics, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_artist(client):
    def _create(name: str = "Test Artist", **extra):
        response = client.post("/api/admin/artists", json={"name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _create
