"""
Tests for the generic failure path: internal errors become a 500 envelope
without leaking detail, and a failed commit is never reported as success.
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import JOHN, bearer, signup

GENERIC_FAILURE = {"message": "Something went wrong", "data": {}, "success": False}


@pytest.fixture
def lenient_client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


class TestUnexpectedErrors:
    def test_corrupted_password_hash_is_generic_500(self, lenient_client, tmp_path):
        signup(lenient_client)
        with sqlite3.connect(tmp_path / "postboard.sqlite3") as conn:
            conn.execute(
                "UPDATE users SET password_hash = ? WHERE username = ?",
                ("not-a-bcrypt-hash", JOHN["username"]),
            )

        response = lenient_client.post(
            "/api/auth/login",
            json={"user": JOHN["username"], "password": JOHN["password"]},
        )

        assert response.status_code == 500
        assert response.json() == GENERIC_FAILURE
        for leaked in ("HashingError", "malformed", "salt", "Traceback"):
            assert leaked not in response.text

    def test_failed_commit_is_not_reported_as_created(self, lenient_client, monkeypatch):
        token = signup(lenient_client)["authToken"]

        async def failing_commit(self):
            raise RuntimeError("database went away")

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = lenient_client.post(
            "/api/post/create",
            json={"title": "Hello"},
            headers=bearer(token),
        )
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json() == GENERIC_FAILURE
        assert "database went away" not in response.text
        assert lenient_client.get("/api/post/").json()["data"]["posts"] == []
