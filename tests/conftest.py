"""Shared fixtures: a fresh application and SQLite file per test."""

import pytest
from fastapi.testclient import TestClient

from publisher_api.app.core.config import Settings
from publisher_api.app.main import create_app


TEST_USER = {
    "username": "testuser",
    "password": "55555",
    "email": "testuser@test.com",
}

TEST_PUBLISHER = {
    "name": "test publisher",
    "desc": "test publisher description",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "test.db"),
        secret_key="test-secret",
        enforce_ownership=False,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which applies migrations.
    with TestClient(app) as c:
        yield c


def signup(client, **overrides):
    user = dict(TEST_USER, **overrides)
    resp = client.post("/api/signup", json=user)
    assert resp.status_code == 200
    return resp.text


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token(client):
    return signup(client)


@pytest.fixture
def publisher(client, token):
    resp = client.post("/api/publisher", json=TEST_PUBLISHER, headers=bearer(token))
    assert resp.status_code == 200
    return resp.json()
