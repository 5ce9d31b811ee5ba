"""
Shared fixtures.

Every test app runs against its own in-memory SQLite database and never
reads the project's .env file.
"""

import pytest
from fastapi.testclient import TestClient

from keygate.config import Settings
from keygate.main import create_app

TEST_SECRET = "test-secret-for-keygate-tokens-0123456789"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "jwt_secret": TEST_SECRET,
        "bcrypt_rounds": 4,
        "static_dir": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db_session(app, client):
    """Session on the same database the client talks to."""
    session = app.state.db.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_token(client):
    creds = {"email": "admin@example.com", "password": "s3cret-pass"}
    assert client.post("/api/admin/create", json=creds).status_code == 200
    resp = client.post("/api/admin/login", json=creds)
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
