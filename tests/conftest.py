"""
Shared fixtures: an app wired to a throwaway SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "tests-secret-key"

JOHN = {
    "fullName": "John Doe",
    "email": "doe.john@example.com",
    "username": "doe.john",
    "password": "john.doe.123",
}

JANE = {
    "fullName": "Jane Roe",
    "email": "roe.jane@example.com",
    "username": "roe.jane",
    "password": "jane.roe.456",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        app_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'postboard.sqlite3'}",
        bcrypt_rounds=4,
        auto_create_tables=True,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def signup(client, payload=None):
    response = client.post("/api/auth/signup", json=payload or JOHN)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
