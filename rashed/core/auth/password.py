"""
Password utilities for Rashed authentication.

Hashes are bcrypt via passlib. ``verify_and_update`` also reports a fresh
hash when the stored one uses deprecated parameters, so callers can upgrade
it on a successful login.
"""

from typing import Optional, Tuple

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Used when the username is unknown so login timing does not reveal it
_DUMMY_HASH = pwd_context.hash("rashed-dummy-password")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    result: str = pwd_context.hash(password)
    return result


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored hash."""
    result: bool = pwd_context.verify(plain_password, hashed_password)
    return result


def verify_and_update(
    plain_password: str, hashed_password: str
) -> Tuple[bool, Optional[str]]:
    """
    Verify a password and return a replacement hash when one is due.

    Returns:
        ``(verified, new_hash)`` where ``new_hash`` is None unless the stored
        hash should be replaced.
    """
    verified, new_hash = pwd_context.verify_and_update(plain_password, hashed_password)
    return bool(verified), new_hash


def burn_password_check(plain_password: str) -> None:
    """Spend the same time as a real check for an unknown account."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
