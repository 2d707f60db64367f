"""
bcrypt password hashing.

New hashes pre-hash the password with SHA-256 before bcrypt, which removes
bcrypt's 72-byte input limit. Verification also accepts plain bcrypt
hashes, as written by the previous Node service (bcryptjs), so existing
accounts keep working.
"""

import base64
import hashlib

import bcrypt as bcrypt_lib

from common.auth.base import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hasher with SHA-256 pre-hashing."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    def _prehash_password(self, password: str) -> str:
        """
        Pre-hash password with SHA-256 before bcrypt.

        This handles bcrypt's 72-byte limit and ensures consistent
        behavior across all password lengths.
        """
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash).decode("utf-8")

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt with SHA-256 pre-hashing."""
        prehashed = self._prehash_password(password)
        salt = bcrypt_lib.gensalt(rounds=self._rounds)
        return bcrypt_lib.hashpw(prehashed.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a password against its hash.

        Supports both new (SHA-256 pre-hashed) and legacy (direct bcrypt) hashes.
        A malformed stored hash is a mismatch, not an error.
        """
        if not password or not hashed:
            return False

        hashed_bytes = hashed.encode("utf-8")

        prehashed = self._prehash_password(password)
        try:
            if bcrypt_lib.checkpw(prehashed.encode("utf-8"), hashed_bytes):
                return True
        except ValueError:
            # Invalid salt / malformed hash
            return False

        # Legacy hashes were computed on the raw password
        try:
            return bcrypt_lib.checkpw(password.encode("utf-8"), hashed_bytes)
        except ValueError:
            # Password too long for direct bcrypt - definitely not a match
            return False
