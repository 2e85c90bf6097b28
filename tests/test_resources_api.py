from unittest import mock

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.session_store import MemorySessionStore
from app.services.storage import BaseStore, MemoryStore
from tests.conftest import make_resource

NEW_RESOURCE = {
    "name": "Eastside Food Bank",
    "type": "food",
    "address": "12 Edgewood Ave, Atlanta, GA",
    "latitude": 33.7545,
    "longitude": -84.3720,
    "hours": "Tue-Sat: 10am-2pm",
}


def test_list_resources_is_public(client, store):
    store.create(make_resource())
    resp = client.get("/api/resources")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["id"] == 1
    assert body[0]["latitude"] == "33.749"


def test_list_resources_by_city(client, store):
    atlanta = store.create(make_resource())
    store.create(make_resource(latitude="35.1495", longitude="-90.0490"))

    resp = client.get("/api/resources", params={"city": "Atlanta"})
    assert [r["id"] for r in resp.json()] == [atlanta.id]

    resp = client.get("/api/resources", params={"city": "Nonexistent"})
    assert len(resp.json()) == 2


def test_get_resource(client, store):
    created = store.create(make_resource())
    resp = client.get(f"/api/resources/{created.id}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Test Shelter"


def test_get_missing_resource_is_404(client):
    resp = client.get("/api/resources/999")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Resource not found"}


def test_non_integer_id_is_400(client):
    resp = client.get("/api/resources/abc")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid resource ID"}


def test_create_requires_login(client, store):
    resp = client.post("/api/resources", json=NEW_RESOURCE)
    assert resp.status_code == 401
    assert store.get_all() == []


def test_create_resource(auth_client, store):
    resp = auth_client.post("/api/resources", json=NEW_RESOURCE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 1
    assert body["type"] == "food"
    assert body["notes"] is None
    assert float(body["latitude"]) == 33.7545
    assert store.get_by_id(1).name == "Eastside Food Bank"


def test_create_accepts_numeric_strings_and_ignores_city(auth_client):
    payload = {**NEW_RESOURCE, "latitude": "33.75450", "longitude": "-84.3720", "city": "Atlanta"}
    resp = auth_client.post("/api/resources", json=payload)
    assert resp.status_code == 201
    assert resp.json()["latitude"] == "33.7545"
    assert "city" not in resp.json()


def test_ids_are_sequential(auth_client):
    ids = [auth_client.post("/api/resources", json=NEW_RESOURCE).json()["id"] for _ in range(3)]
    assert ids == [1, 2, 3]


def test_create_out_of_range_latitude_rejected(auth_client, store):
    resp = auth_client.post("/api/resources", json={**NEW_RESOURCE, "latitude": 91})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation error"
    assert [e["field"] for e in body["errors"]] == ["latitude"]
    assert store.get_all() == []


def test_create_out_of_range_longitude_rejected(auth_client, store):
    resp = auth_client.post("/api/resources", json={**NEW_RESOURCE, "longitude": -180.5})
    assert resp.status_code == 400
    assert store.get_all() == []


def test_create_unknown_type_rejected(auth_client, store):
    resp = auth_client.post("/api/resources", json={**NEW_RESOURCE, "type": "library"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "type"
    assert store.get_all() == []


def test_create_missing_required_fields_lists_each(auth_client):
    resp = auth_client.post("/api/resources", json={"type": "food", "latitude": 1, "longitude": 1})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"name", "address"}


def test_create_blank_name_rejected(auth_client):
    resp = auth_client.post("/api/resources", json={**NEW_RESOURCE, "name": "   "})
    assert resp.status_code == 400


def test_partial_update_changes_only_supplied_fields(auth_client, store):
    created = store.create(make_resource(notes="old notes"))
    resp = auth_client.patch(f"/api/resources/{created.id}", json={"hours": "9am-5pm"})
    assert resp.status_code == 200
    updated = store.get_by_id(created.id)
    assert updated.hours == "9am-5pm"
    assert updated.model_dump(exclude={"hours"}) == created.model_dump(exclude={"hours"})


def test_empty_update_is_noop(auth_client, store):
    created = store.create(make_resource())
    resp = auth_client.patch(f"/api/resources/{created.id}", json={})
    assert resp.status_code == 200
    assert store.get_by_id(created.id) == created


def test_update_validates_payload(auth_client, store):
    created = store.create(make_resource())
    resp = auth_client.patch(f"/api/resources/{created.id}", json={"latitude": -95})
    assert resp.status_code == 400
    resp = auth_client.patch(f"/api/resources/{created.id}", json={"name": None})
    assert resp.status_code == 400
    assert store.get_by_id(created.id) == created


def test_update_optional_field_can_be_cleared(auth_client, store):
    created = store.create(make_resource(notes="temporary"))
    resp = auth_client.patch(f"/api/resources/{created.id}", json={"notes": None})
    assert resp.status_code == 200
    assert store.get_by_id(created.id).notes is None


def test_update_missing_resource_is_404(auth_client):
    resp = auth_client.patch("/api/resources/42", json={"name": "x"})
    assert resp.status_code == 404


def test_update_requires_login(client, store):
    created = store.create(make_resource())
    resp = client.patch(f"/api/resources/{created.id}", json={"name": "x"})
    assert resp.status_code == 401
    assert store.get_by_id(created.id).name == "Test Shelter"


def test_delete_resource(auth_client, store):
    created = store.create(make_resource())
    other = store.create(make_resource(name="other"))

    resp = auth_client.delete(f"/api/resources/{created.id}")
    assert resp.status_code == 204
    assert resp.content == b""
    assert auth_client.get(f"/api/resources/{created.id}").status_code == 404
    assert store.get_by_id(other.id) is not None


def test_delete_missing_resource_is_404(auth_client, store):
    store.create(make_resource())
    resp = auth_client.delete("/api/resources/77")
    assert resp.status_code == 404
    assert len(store.get_all()) == 1


def test_delete_non_integer_id_is_400(auth_client):
    assert auth_client.delete("/api/resources/1.5").status_code == 400


def test_delete_requires_login(client, store):
    created = store.create(make_resource())
    assert client.delete(f"/api/resources/{created.id}").status_code == 401
    assert store.get_by_id(created.id) is not None


def test_unauthenticated_mutations_never_reach_store():
    store = mock.create_autospec(BaseStore, instance=True)
    client = TestClient(create_app(store=store, sessions=MemorySessionStore(ttl_minutes=60)))

    assert client.post("/api/resources", json=NEW_RESOURCE).status_code == 401
    assert client.patch("/api/resources/1", json={"name": "x"}).status_code == 401
    assert client.delete("/api/resources/1").status_code == 401

    assert store.mock_calls == []


def test_store_failure_returns_generic_500():
    store = MemoryStore()
    store.get_all = mock.Mock(side_effect=RuntimeError("database exploded at 10.0.0.5"))
    app = create_app(store=store, sessions=MemorySessionStore(ttl_minutes=60))
    client = TestClient(app, raise_server_exceptions=False)

    resp = client.get("/api/resources")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


@pytest.mark.parametrize("raw_id", ["0_1", "+1", "%201", "1%20", "١"])
def test_loosely_integer_ids_are_400(client, store, raw_id):
    store.create(make_resource())
    resp = client.get(f"/api/resources/{raw_id}")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid resource ID"}


def test_negative_id_is_not_found(client):
    assert client.get("/api/resources/-1").status_code == 404
