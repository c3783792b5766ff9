"""Password hashing and verification service."""

from functools import lru_cache

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from tenxcards.config import get_settings

password_hash = PasswordHash.recommended()


def _pepper(plain_password: str) -> str:
    return plain_password + get_settings().PASSWORD_PEPPER


def hash_password(plain_password: str) -> str:
    """Hash a plain password for storage with pepper."""
    return password_hash.hash(_pepper(plain_password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a peppered hash."""
    try:
        return password_hash.verify(_pepper(plain_password), hashed_password)
    except UnknownHashError:
        return False


@lru_cache
def get_dummy_hash() -> str:
    """A real hash to verify against when the user does not exist."""
    return password_hash.hash("dummy_password_for_timing_attack_prevention")
