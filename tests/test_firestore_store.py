from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import ConflictError
from app.models.resource import ResourceUpdate
from app.services.session_store import FirestoreSessionStore
from app.services.storage.firestore_store import FirestoreStore
from app.utils import firestore_helpers
from tests.conftest import make_resource
from tests.fake_firestore import FakeFirestore


@pytest.fixture
def db(monkeypatch):
    # The fake transaction applies writes directly; no retry wrapper needed.
    monkeypatch.setattr(firestore_helpers.firestore, "transactional", lambda fn: fn)
    return FakeFirestore()


@pytest.fixture
def fs_store(db):
    return FirestoreStore(db=db)


def test_create_assigns_sequential_ids_and_stores_text_coordinates(fs_store, db):
    first = fs_store.create(make_resource())
    second = fs_store.create(make_resource(name="second"))

    assert (first.id, second.id) == (1, 2)
    assert db.data["counters"]["resources"] == {"value": 2}
    assert db.data["resources"]["1"]["latitude"] == "33.749"
    assert db.data["resources"]["1"]["type"] == "shelter"


def test_get_all_and_by_id(fs_store):
    created = fs_store.create(make_resource())
    assert fs_store.get_all() == [created]
    assert fs_store.get_by_id(created.id) == created
    assert fs_store.get_by_id(99) is None


def test_get_by_city(fs_store):
    atlanta = fs_store.create(make_resource())
    fs_store.create(make_resource(latitude="36.1627", longitude="-86.7816"))

    assert [r.id for r in fs_store.get_by_city("Atlanta")] == [atlanta.id]
    assert len(fs_store.get_by_city("Nonexistent")) == 2


def test_partial_update(fs_store):
    created = fs_store.create(make_resource())
    updated = fs_store.update(created.id, ResourceUpdate(name="Renamed"))

    assert updated.name == "Renamed"
    assert updated.address == created.address
    assert fs_store.get_by_id(created.id) == updated
    assert fs_store.update(created.id, ResourceUpdate()) == updated
    assert fs_store.update(404, ResourceUpdate(name="x")) is None


def test_delete(fs_store):
    created = fs_store.create(make_resource())
    assert fs_store.delete(404) is False
    assert fs_store.delete(created.id) is True
    assert fs_store.get_by_id(created.id) is None


def test_users(fs_store):
    user = fs_store.create_user("admin_ga", "hash.salt")
    assert fs_store.get_user(user.id) == user
    assert fs_store.get_user_by_username("admin_ga") == user
    assert fs_store.get_user_by_username("admin_fl") is None
    with pytest.raises(ConflictError):
        fs_store.create_user("admin_ga", "other.salt")


def test_ping(fs_store):
    assert fs_store.ping() is True


def test_firestore_sessions(db):
    now = [datetime(2026, 3, 1, tzinfo=timezone.utc)]
    sessions = FirestoreSessionStore(db, ttl_minutes=10, clock=lambda: now[0])

    session = sessions.create(7)
    assert sessions.get(session.id).user_id == 7

    now[0] += timedelta(minutes=11)
    assert sessions.get(session.id) is None
    assert session.id not in db.data["sessions"]


def test_firestore_sessions_naive_expiry_treated_as_utc(db):
    db.collection("sessions").document("abc").set(
        {"user_id": 1, "expires_at": datetime(2030, 1, 1)}
    )
    sessions = FirestoreSessionStore(db, ttl_minutes=10)
    assert sessions.get("abc").user_id == 1


def test_create_user_reserves_username(fs_store, db):
    user = fs_store.create_user("admin/ga", "hash.salt")

    assert db.data["usernames"]["admin%2Fga"] == {"user_id": user.id}
    assert db.data["users"][str(user.id)]["username"] == "admin/ga"


def test_create_user_conflicts_on_reserved_username(fs_store, db):
    # Another writer reserved the name but its user document is not yet
    # visible to the username query.
    db.collection("usernames").document("admin_sc").set({"user_id": 41})

    with pytest.raises(ConflictError):
        fs_store.create_user("admin_sc", "hash.salt")

    assert "users" not in db.data or db.data["users"] == {}
    assert "users" not in db.data.get("counters", {})
