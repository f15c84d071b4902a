# This file hashes and verifies account passwords with a passlib bcrypt context.
# The configured round count is the bcrypt cost factor; hashes record their own cost,
# so raising it later keeps existing accounts verifiable.

from __future__ import annotations

from functools import lru_cache

from passlib.context import CryptContext

BCRYPT_ROUNDS = 12
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


@lru_cache(maxsize=4)
def password_context(rounds: int = BCRYPT_ROUNDS) -> CryptContext:
    """Shared context per cost factor; building one is not free."""

    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    return password_context(rounds).hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored hash; malformed or foreign hashes never verify."""

    if not hashed:
        return False
    try:
        return password_context().verify(password, hashed)
    except ValueError:
        return False
