import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.models.resource import ResourceCreate
from app.services.auth_service import AuthService
from app.services.session_store import MemorySessionStore
from app.services.storage import MemoryStore

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret123"


def make_resource(**overrides) -> ResourceCreate:
    data = {
        "name": "Test Shelter",
        "type": "shelter",
        "address": "1 Peachtree St, Atlanta, GA",
        "latitude": "33.7490",
        "longitude": "-84.3880",
        "hours": "24/7",
        "notes": None,
    }
    data.update(overrides)
    return ResourceCreate(**data)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sessions():
    return MemorySessionStore(ttl_minutes=60)


@pytest.fixture
def admin(store):
    return AuthService(store).create_user(ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def app(store, sessions, admin):
    return create_app(store=store, sessions=sessions)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    resp = client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client
