"""
AI proxy for Rashed.

A thin client over an OpenAI-compatible chat-completion API used for the
assistant chat, code generation, code review, documentation and
requirement extraction.
"""

from .client import AIClient, get_ai_client, set_ai_client
from .schemas import CodeAnalysis, CodeIssue, TechnicalRequirements

__all__ = [
    "AIClient",
    "CodeAnalysis",
    "CodeIssue",
    "TechnicalRequirements",
    "get_ai_client",
    "set_ai_client",
]
