"""
Tests for the bcrypt password hasher.
"""

import pytest

from auth.password import PasswordHasher
from utils.errors import HashingError


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_verify_accepts_original_password(self, hasher):
        hashed = hasher.hash("john.doe.123")
        assert hasher.verify("john.doe.123", hashed) is True

    def test_verify_rejects_other_password(self, hasher):
        hashed = hasher.hash("john.doe.123")
        assert hasher.verify("john.doe.124", hashed) is False
        assert hasher.verify("", hashed) is False

    def test_hash_is_salted(self, hasher):
        first = hasher.hash("same-password")
        second = hasher.hash("same-password")
        assert first != second
        assert hasher.verify("same-password", first)
        assert hasher.verify("same-password", second)

    def test_hash_never_contains_plaintext(self, hasher):
        assert "john.doe.123" not in hasher.hash("john.doe.123")

    def test_work_factor_is_encoded_in_hash(self):
        hashed = PasswordHasher(rounds=5).hash("pw")
        assert hashed.startswith("$2b$05$")

    def test_malformed_stored_hash_raises(self, hasher):
        with pytest.raises(HashingError):
            hasher.verify("john.doe.123", "not-a-bcrypt-hash")

    def test_overlong_password_never_matches(self, hasher):
        hashed = hasher.hash("x" * 72)
        assert hasher.verify("x" * 73, hashed) is False
