"""
Pytest configuration for StartupOS tests.

API tests run against in-memory repositories (tests/fakes.py) wired in
through app.dependency_overrides; PostgreSQL tests live in tests/db.
"""

import os

import pytest

# Settings are read from the environment; pin the ones tests depend on
# before anything imports config.
os.environ["ENVIRONMENT"] = "test"
os.environ["LOCAL_STORE_BACKEND"] = "memory"
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ["STRIPE_WEBHOOK_SECRET"] = ""
os.environ["ALLOW_UNVERIFIED_PASSWORDS"] = "true"
os.environ.pop("BOOTSTRAP_ENABLED", None)

from config import Settings, get_settings  # noqa: E402
from services.blob_store import MemoryBlobBackend  # noqa: E402
from services.keyed_store import KeyedStore  # noqa: E402
from services.local_services import build_local_services  # noqa: E402

from .fakes import FakeDatabase, install_fakes  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so monkeypatched env vars take effect"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    return MemoryBlobBackend()


@pytest.fixture
def store(backend):
    return KeyedStore(backend)


@pytest.fixture
def services(store):
    return build_local_services(store)


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def client(db):
    """TestClient over the real app with in-memory repositories"""
    from fastapi.testclient import TestClient
    from main import app

    install_fakes(app, db, Settings(aws_access_key_id=""))
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in with the bootstrap admin and return (token, user)"""
    def _login(email="admin@startupos.com", password="admin123"):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return body["token"], body["user"]
    return _login


@pytest.fixture
def auth_headers(login):
    token, _ = login()
    return {"Authorization": f"Bearer {token}"}
