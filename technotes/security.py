"""
TechNotes Backend — Password Hashing
======================================

What:  Salted one-way hashing of user passwords with Argon2id.
Why:   Passwords are stored only as hashes; the plaintext never reaches the
       database or the logs.
How:   argon2-cffi's PasswordHasher generates a random salt per hash and encodes
       the parameters into the hash string, so verification needs nothing but
       the stored value.
Who:   UserService receives a PasswordHasher through its constructor.
"""

from functools import lru_cache

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from technotes.config import settings


class PasswordHasher:
    """Hashes and verifies passwords."""

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536):
        self._hasher = Argon2Hasher(time_cost=time_cost, memory_cost=memory_cost)

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """True when `password` matches `password_hash`; never raises on mismatch."""
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher built from settings."""
    return PasswordHasher(
        time_cost=settings.password_time_cost,
        memory_cost=settings.password_memory_cost,
    )
