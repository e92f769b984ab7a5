from __future__ import annotations

from fastapi.testclient import TestClient

from user_directory import deps
from user_directory.main import app
from user_directory.sample_data import SAMPLE_USERS, load_sample_users
from user_directory.settings import Settings
from user_directory.user_store import InMemoryUserStore


def test_load_sample_users_creates_four_users():
    store = InMemoryUserStore()
    created = load_sample_users(store)
    assert len(created) == 4
    assert store.count() == 4
    assert [r.email for r in store.list_all()] == [email for _, _, email in SAMPLE_USERS]


def test_load_sample_users_twice_skips_existing():
    store = InMemoryUserStore()
    load_sample_users(store)
    assert load_sample_users(store) == []
    assert store.count() == 4


def test_startup_seeds_store_when_enabled(monkeypatch):
    store = InMemoryUserStore()
    monkeypatch.setattr(deps, "_store", store)
    monkeypatch.setenv("LOAD_SAMPLE_DATA", "true")

    with TestClient(app) as client:
        resp = client.get("/api/users/count")
        assert resp.json() == {"count": 4}


def test_startup_skips_seed_when_disabled(monkeypatch):
    store = InMemoryUserStore()
    monkeypatch.setattr(deps, "_store", store)
    monkeypatch.setenv("LOAD_SAMPLE_DATA", "false")

    with TestClient(app) as client:
        assert client.get("/api/users/count").json() == {"count": 0}
        assert client.get("/configz").json()["load_sample_data"] is False


def test_settings_normalise_log_level():
    s = Settings(LOG_LEVEL=" debug ")
    assert s.log_level == "DEBUG"


def test_startup_seeds_overridden_store():
    store = InMemoryUserStore()
    app.dependency_overrides[deps.get_user_store] = lambda: store
    app.dependency_overrides[deps.get_settings_dep] = lambda: Settings(LOAD_SAMPLE_DATA=True)
    try:
        with TestClient(app) as client:
            assert client.get("/api/users/count").json() == {"count": 4}
        assert store.count() == 4
    finally:
        app.dependency_overrides.clear()


def test_startup_honours_overridden_settings(monkeypatch):
    store = InMemoryUserStore()
    monkeypatch.setenv("LOAD_SAMPLE_DATA", "true")
    app.dependency_overrides[deps.get_user_store] = lambda: store
    app.dependency_overrides[deps.get_settings_dep] = lambda: Settings(LOAD_SAMPLE_DATA=False)
    try:
        with TestClient(app) as client:
            assert client.get("/api/users/count").json() == {"count": 0}
            assert client.get("/configz").json()["load_sample_data"] is False
    finally:
        app.dependency_overrides.clear()
