"""
Rashed - private developer dashboard with an AI assistant.

Tracks projects, deployments, environments, integrations, approvals and
logs behind session-cookie authentication, and proxies chat, code
generation, code review, documentation and requirement extraction to an
OpenAI-compatible completion API.
"""

__version__ = "0.1.0"
__author__ = "Rashed Team"
__description__ = "Developer dashboard with an AI assistant"

# Core imports
from .core.config import RashedConfig
from .core.logging import setup_logging

# Initialize logging
setup_logging()

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "RashedConfig",
    "setup_logging",
]
