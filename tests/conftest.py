"""Test configuration and shared fixtures for SessionKeeper service tests.

The configuration collaborator is stubbed to return an empty config so every
test sees the built-in maintenance defaults unless it overrides them.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sessionkeeper_service.config import SessionKeeperSettings
from sessionkeeper_service.services import maintenance
from sessionkeeper_service.services.session_store import SessionStoreService


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_settings(tmp_path, **overrides) -> SessionKeeperSettings:
    defaults = {
        "sessions_path": str(tmp_path / "sessions.json"),
        "sessions_config_path": str(tmp_path / "config.json"),
        "sessionkeeper_service_token": None,
        "auto_maintain": False,
    }
    defaults.update(overrides)
    return SessionKeeperSettings(**defaults)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def empty_config(monkeypatch):
    """Configuration loader returns {} so built-in defaults apply."""
    config = {}
    monkeypatch.setattr(maintenance, "load_config", lambda: config)
    return config


@pytest.fixture
def settings(tmp_path):
    return _make_settings(tmp_path)


@pytest.fixture
def sessions_path(tmp_path):
    return tmp_path / "sessions.json"


@pytest.fixture
def store_service(sessions_path):
    return SessionStoreService(str(sessions_path))


@pytest_asyncio.fixture
async def app_no_store(tmp_path):
    """FastAPI app without a store service. Session endpoints return 503."""
    from sessionkeeper_service.main import app

    app.state.settings = _make_settings(tmp_path)
    app.state.store_service = None
    yield app


@pytest_asyncio.fixture
async def app_with_store(tmp_path, store_service):
    """FastAPI app backed by a sessions.json under tmp_path."""
    from sessionkeeper_service.main import app

    app.state.settings = _make_settings(tmp_path)
    app.state.store_service = store_service
    yield app


@pytest_asyncio.fixture
async def client_no_store(app_no_store):
    transport = ASGITransport(app=app_no_store)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def client(app_with_store):
    transport = ASGITransport(app=app_with_store)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
