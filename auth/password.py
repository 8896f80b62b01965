"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

from utils.errors import HashingError

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hasher bound to a fixed work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(password.encode(), salt).decode()
        except (ValueError, TypeError) as exc:
            raise HashingError(f"bcrypt hashing failed: {exc}") from exc

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash.

        A wrong password returns ``False``; only an unreadable stored hash
        raises ``HashingError``.
        """
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            # Signup never stores such a password, so it cannot match.
            return False
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError) as exc:
            raise HashingError(f"Stored password hash is malformed: {exc}") from exc
