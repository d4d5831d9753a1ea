"""
Tortoise ORM models for the Rashed dashboard.

Flat records with auto-incrementing ids. Foreign keys are nullable and carry
no cascading behaviour beyond what the database enforces.
"""

from tortoise import fields
from tortoise.models import Model


class Project(Model):
    """Software project tracked on the dashboard."""

    id = fields.IntField(primary_key=True)
    name = fields.TextField()
    type = fields.TextField()
    description = fields.TextField(null=True)
    tech_stack = fields.JSONField(null=True)  # list of strings
    created_at = fields.DatetimeField(auto_now_add=True)

    user: fields.ForeignKeyNullableRelation["User"] = fields.ForeignKeyField(  # type: ignore[name-defined]  # noqa: F821
        "models.User", related_name="projects", null=True, db_index=True
    )

    deployments: fields.ReverseRelation["Deployment"]
    activities: fields.ReverseRelation["Activity"]

    class Meta:
        """Meta class for Project model."""

        table = "projects"

    def __str__(self) -> str:
        """Return string representation of Project."""
        return f"Project({self.name})"


class Deployment(Model):
    """A deployment of a project to a named environment."""

    id = fields.IntField(primary_key=True)
    project: fields.ForeignKeyNullableRelation[Project] = fields.ForeignKeyField(
        "models.Project", related_name="deployments", null=True
    )
    environment = fields.TextField()
    status = fields.TextField()  # success, failed, in_progress, ...
    logs = fields.TextField(null=True)
    deployed_at = fields.DatetimeField(auto_now_add=True)
    deployed_by = fields.TextField(null=True)

    class Meta:
        """Meta class for Deployment model."""

        table = "deployments"


class Environment(Model):
    """Deployment target such as development, staging or production."""

    id = fields.IntField(primary_key=True)
    name = fields.TextField()
    type = fields.TextField()
    config = fields.JSONField(null=True)
    status = fields.TextField()
    last_deployed = fields.DatetimeField(null=True)

    class Meta:
        """Meta class for Environment model."""

        table = "environments"


class Integration(Model):
    """External service hooked into the dashboard."""

    id = fields.IntField(primary_key=True)
    name = fields.TextField()
    type = fields.TextField()
    config = fields.JSONField(null=True)
    status = fields.TextField()
    last_used = fields.DatetimeField(null=True)
    request_count = fields.IntField(default=0)

    class Meta:
        """Meta class for Integration model."""

        table = "integrations"


class Activity(Model):
    """Entry in the dashboard activity feed."""

    id = fields.IntField(primary_key=True)
    type = fields.TextField()
    description = fields.TextField()
    project: fields.ForeignKeyNullableRelation[Project] = fields.ForeignKeyField(
        "models.Project", related_name="activities", null=True
    )
    timestamp = fields.DatetimeField(auto_now_add=True)
    metadata = fields.JSONField(null=True)

    class Meta:
        """Meta class for Activity model."""

        table = "activities"


class Approval(Model):
    """Approval request; status is one of pending, approved or rejected."""

    id = fields.IntField(primary_key=True)
    title = fields.TextField()
    description = fields.TextField()
    type = fields.TextField()
    priority = fields.TextField()
    status = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)
    metadata = fields.JSONField(null=True)

    class Meta:
        """Meta class for Approval model."""

        table = "approvals"


class Log(Model):
    """System log line shown on the logs page."""

    id = fields.IntField(primary_key=True)
    type = fields.TextField()
    message = fields.TextField()
    timestamp = fields.DatetimeField(auto_now_add=True)
    metadata = fields.JSONField(null=True)

    class Meta:
        """Meta class for Log model."""

        table = "logs"
