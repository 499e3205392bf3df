"""
Credential hashing - bcrypt password hashing and verification.

bcrypt salts every hash itself and compares in constant time, so two
hashes of the same password differ and verification does not leak how
much of a candidate matched.

bcrypt only reads the first 72 bytes of its input. Passwords are first
reduced to a base64-encoded SHA-256 digest (44 bytes), so every byte of
a long password takes part in the comparison.
"""

import base64
import hashlib

import bcrypt

from .exceptions import HashingError

_DUMMY_PASSWORD = "dummy_password_for_timing_safety"


def _password_bytes(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


class PasswordHasher:
    """One-way password hasher backed by bcrypt."""

    def __init__(self, rounds: int = 10) -> None:
        """
        Args:
            rounds: bcrypt cost factor (>= 10)
        """
        if rounds < 10:
            raise ValueError("bcrypt cost factor must be at least 10")
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password with a fresh random salt.

        Raises:
            HashingError: If bcrypt fails internally
        """
        try:
            hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as e:
            raise HashingError("password hashing failed") from e
        return hashed.decode()

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Check a candidate password against a stored hash.

        Returns False, never raises, for a mismatch or a malformed hash.
        """
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
        except ValueError:
            return False

    def dummy_hash(self) -> str:
        """
        Hash to compare against when no stored hash exists.

        Built once per hasher with the same cost factor as real hashes, so
        checking a candidate against it takes as long as a wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(_DUMMY_PASSWORD)
        return self._dummy_hash
