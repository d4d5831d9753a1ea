"""
Authentication module for Rashed.

This module provides the user model and password hashing utilities.
"""

from .password import hash_password, verify_password
from .tortoise_models import User

__all__ = [
    "User",
    "hash_password",
    "verify_password",
]
