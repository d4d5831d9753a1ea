"""
Database package for Rashed.

This package provides Tortoise ORM configuration and utilities.
"""

from .tortoise_config import (
    close_tortoise,
    get_database_url,
    get_tortoise_config,
    init_tortoise,
)

__all__ = [
    "close_tortoise",
    "get_database_url",
    "get_tortoise_config",
    "init_tortoise",
]
