"""Publisher routes, driven through the HTTP layer."""

import asyncio
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from conftest import TEST_PUBLISHER, bearer, signup
from publisher_api.app.core.config import Settings
from publisher_api.app.core.security import create_access_token, decode_access_token
from publisher_api.app.main import create_app
from publisher_api.app.services.user_service import UserService


def user_id_of(token, settings):
    return decode_access_token(token, settings)["sub"]


def parse_created(value):
    # pydantic writes UTC as a trailing "Z", which fromisoformat only accepts on 3.11+
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def count_publishers(app):
    with app.state.context.db.cursor() as cursor:
        return cursor.execute("SELECT COUNT(*) AS n FROM publishers").fetchone()["n"]


# --- POST /api/publisher ---

def test_create_returns_publisher(client, token, settings):
    resp = client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer(token))
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == TEST_PUBLISHER["name"]
    assert body["desc"] == TEST_PUBLISHER["desc"]
    assert body["userID"] == user_id_of(token, settings)
    assert body["id"]
    parse_created(body["created"])


def test_create_ignores_user_id_in_body(client, token, settings):
    body = dict(TEST_PUBLISHER, userID="someone-else")
    resp = client.post("/api/publisher", json=body, headers=bearer(token))
    assert resp.status_code == 200
    assert resp.json()["userID"] == user_id_of(token, settings)


@pytest.mark.parametrize("body", [
    {"name": "invalid publisher"},
    {"desc": "only a description"},
    {"name": "", "desc": "empty name"},
    {},
])
def test_create_invalid_body_is_400_with_empty_body(client, app, token, body):
    resp = client.post("/api/publisher", json=body, headers=bearer(token))
    assert resp.status_code == 400
    assert resp.content == b""
    assert count_publishers(app) == 0


def test_create_json_array_is_400(client, token):
    resp = client.post("/api/publisher", json=[TEST_PUBLISHER], headers=bearer(token))
    assert resp.status_code == 400


def test_create_empty_token_is_401(client, app):
    resp = client.post("/api/publisher", json=TEST_PUBLISHER, headers={"Authorization": "Bearer "})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert count_publishers(app) == 0


def test_create_garbage_token_is_401(client):
    resp = client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer("not.a.token"))
    assert resp.status_code == 401


def test_create_invalid_body_and_bad_token_is_401(client):
    resp = client.post("/api/publisher", json={"name": "x"}, headers=bearer("garbage"))
    assert resp.status_code == 401


def test_create_malformed_json_and_bad_token_is_401(client, app):
    resp = client.post(
        "/api/publisher",
        content=b"{not json",
        headers={"Authorization": "Bearer garbage", "Content-Type": "application/json"},
    )
    assert resp.status_code == 401
    assert count_publishers(app) == 0


def test_create_malformed_json_is_400(client, app, token):
    resp = client.post(
        "/api/publisher",
        content=b"{not json",
        headers={**bearer(token), "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.content == b""
    assert count_publishers(app) == 0


def test_create_without_body_is_400(client, token):
    resp = client.post("/api/publisher", headers=bearer(token))
    assert resp.status_code == 400


def test_create_unregistered_route_is_404(client, token):
    resp = client.post("/api/publish-unregistered", json=TEST_PUBLISHER, headers=bearer(token))
    assert resp.status_code == 404


# --- GET /api/publisher/{id} ---

def test_get_returns_publisher(client, token, publisher, settings):
    resp = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token))
    assert resp.status_code == 200
    body = resp.json()
    assert body == publisher
    assert body["userID"] == user_id_of(token, settings)
    parse_created(body["created"])


def test_get_without_header_is_401(client, publisher):
    resp = client.get(f"/api/publisher/{publisher['id']}")
    assert resp.status_code == 401


def test_get_unknown_id_is_404(client, token):
    resp = client.get("/api/publisher/does-not-exist", headers=bearer(token))
    assert resp.status_code == 404
    assert resp.json()["detail"]


def test_get_unregistered_route_is_404(client, token, publisher):
    resp = client.get(f"/api/unregistered-route/{publisher['id']}", headers=bearer(token))
    assert resp.status_code == 404


def test_unregistered_route_is_404_without_auth(client):
    resp = client.get("/api/unregistered-route/abc")
    assert resp.status_code == 404


def test_list_returns_only_own_publishers(client, token, publisher):
    other = signup(client, username="otheruser")
    client.post("/api/publisher", json={"name": "other", "desc": "other desc"}, headers=bearer(other))

    resp = client.get("/api/publisher", headers=bearer(token))
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [publisher["id"]]


# --- PUT /api/publisher/{id} ---

def test_update_returns_new_publisher(client, token, publisher):
    resp = client.put(
        f"/api/publisher/{publisher['id']}",
        json={"name": "new publisher name", "desc": "new publisher description"},
        headers=bearer(token),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "new publisher name"
    assert body["desc"] == "new publisher description"
    assert body["created"] == publisher["created"]
    assert body["userID"] == publisher["userID"]

    stored = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token)).json()
    assert stored == body


def test_update_empty_token_is_401(client, publisher):
    resp = client.put(
        f"/api/publisher/{publisher['id']}",
        json={"name": "new publisher name", "desc": "new publisher description"},
        headers={"Authorization": "Bearer "},
    )
    assert resp.status_code == 401


def test_update_invalid_body_is_400_and_record_unchanged(client, token, publisher):
    resp = client.put(
        f"/api/publisher/{publisher['id']}",
        json={"name": "invalid publisher"},
        headers=bearer(token),
    )
    assert resp.status_code == 400
    assert resp.content == b""

    stored = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token)).json()
    assert stored == publisher


def test_update_malformed_json_and_bad_token_is_401(client, token, publisher):
    resp = client.put(
        f"/api/publisher/{publisher['id']}",
        content=b"{not json",
        headers={"Authorization": "Bearer garbage", "Content-Type": "application/json"},
    )
    assert resp.status_code == 401

    stored = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token)).json()
    assert stored == publisher


def test_update_unknown_id_is_404(client, token):
    resp = client.put(
        "/api/publisher/does-not-exist",
        json={"name": "a", "desc": "b"},
        headers=bearer(token),
    )
    assert resp.status_code == 404


def test_update_unregistered_route_is_404(client, token, publisher):
    resp = client.put(
        f"/api/unregistered-route/{publisher['id']}",
        json={"name": "new publisher name", "desc": "new publisher description"},
        headers=bearer(token),
    )
    assert resp.status_code == 404


# --- DELETE /api/publisher/{id} ---

def test_delete_removes_publisher(client, app, token, publisher):
    resp = client.delete(f"/api/publisher/{publisher['id']}", headers=bearer(token))
    assert resp.status_code == 204
    assert count_publishers(app) == 0
    assert client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token)).status_code == 404


def test_delete_without_token_is_401(client, app, publisher):
    resp = client.delete(f"/api/publisher/{publisher['id']}")
    assert resp.status_code == 401
    assert count_publishers(app) == 1


# --- token lifecycle ---

def test_token_of_deleted_user_is_401(client, app, token, settings):
    asyncio.run(UserService(app.state.context.db).delete_user(user_id_of(token, settings)))
    resp = client.get("/api/publisher", headers=bearer(token))
    assert resp.status_code == 401


def test_token_for_unknown_user_is_401(client, settings):
    token = create_access_token({"sub": "no-such-user"}, settings)
    resp = client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer(token))
    assert resp.status_code == 401


def test_expired_token_is_401(client, token, settings):
    expired = create_access_token({"sub": user_id_of(token, settings)}, settings, expires_delta=-10)
    resp = client.get("/api/publisher", headers=bearer(expired))
    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_401(client, token, settings):
    settings_b = Settings(database_url=settings.database_url, secret_key="another-secret")
    forged = create_access_token({"sub": user_id_of(token, settings)}, settings_b)
    resp = client.get("/api/publisher", headers=bearer(forged))
    assert resp.status_code == 401


# --- ownership policy ---

@pytest.fixture
def owned_client(settings):
    settings.enforce_ownership = True
    with TestClient(create_app(settings)) as c:
        yield c


def test_other_user_may_read_when_ownership_not_enforced(client, publisher):
    other = signup(client, username="otheruser")
    resp = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(other))
    assert resp.status_code == 200


def test_ownership_enforced_blocks_other_users(owned_client):
    owner = signup(owned_client)
    other = signup(owned_client, username="otheruser")
    created = owned_client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer(owner)).json()
    path = f"/api/publisher/{created['id']}"

    assert owned_client.get(path, headers=bearer(other)).status_code == 403
    assert owned_client.put(path, json={"name": "a", "desc": "b"}, headers=bearer(other)).status_code == 403
    assert owned_client.delete(path, headers=bearer(other)).status_code == 403

    resp = owned_client.get(path, headers=bearer(owner))
    assert resp.status_code == 200
    assert resp.json()["name"] == TEST_PUBLISHER["name"]


# --- end to end ---

def test_signup_create_read_update_flow(client, settings):
    token = signup(client)

    created = client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer(token))
    assert created.status_code == 200
    publisher = created.json()
    assert publisher["userID"] == user_id_of(token, settings)

    fetched = client.get(f"/api/publisher/{publisher['id']}", headers=bearer(token))
    assert fetched.status_code == 200
    assert fetched.json() == publisher

    updated = client.put(
        f"/api/publisher/{publisher['id']}",
        json={"name": "new publisher name", "desc": "new publisher description"},
        headers=bearer(token),
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "new publisher name"
    assert updated.json()["desc"] == "new publisher description"
    assert updated.json()["created"] == publisher["created"]
