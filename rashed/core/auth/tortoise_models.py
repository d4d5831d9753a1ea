"""
Tortoise ORM user model for Rashed authentication.
"""

from tortoise import fields
from tortoise.models import Model


class User(Model):
    """Dashboard owner account."""

    id = fields.IntField(primary_key=True)
    username = fields.CharField(max_length=150, unique=True)
    password = fields.CharField(max_length=255)  # bcrypt hash
    name = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    projects: fields.ReverseRelation["Project"]  # type: ignore[name-defined]  # noqa: F821

    class Meta:
        """Meta class for User model."""

        table = "users"

    def __str__(self) -> str:
        """Return string representation of User."""
        return f"User({self.username})"
