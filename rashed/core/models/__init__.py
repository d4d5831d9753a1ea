"""
Core models for Rashed.

This package contains the relational models used throughout the system.
"""

from ..auth.tortoise_models import User
from .tortoise_models import (
    Activity,
    Approval,
    Deployment,
    Environment,
    Integration,
    Log,
    Project,
)

MODEL_MODULES = [
    "rashed.core.models.tortoise_models",
    "rashed.core.auth.tortoise_models",
]

__all__ = [
    "MODEL_MODULES",
    "Activity",
    "Approval",
    "Deployment",
    "Environment",
    "Integration",
    "Log",
    "Project",
    "User",
]
