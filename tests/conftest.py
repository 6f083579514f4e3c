# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from ticketdesk.core.config import Settings
from ticketdesk.main import create_app
from ticketdesk.store.provider import build_store


def make_settings(tmp_path, backend: str, **overrides) -> Settings:
    values = {
        "STORE_BACKEND": backend,
        "DATA_FILE": str(tmp_path / "data.json"),
        "DATABASE_URL": f"sqlite:///{tmp_path / 'tickets.db'}",
        **overrides,
    }
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory(tmp_path):
    def _make(backend: str = "file", **overrides) -> Settings:
        return make_settings(tmp_path, backend, **overrides)

    return _make


@pytest.fixture(params=["file", "sql"])
def settings(request, tmp_path) -> Settings:
    return make_settings(tmp_path, request.param)


@pytest.fixture
def store(settings):
    store = build_store(settings)
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def new_ticket(client):
    def _create(**fields):
        body = {"title": "A", "description": "B", "author": "X", "group": "Y", **fields}
        r = client.post("/api/tickets", json=body)
        assert r.status_code == 201
        return r.json()

    return _create
