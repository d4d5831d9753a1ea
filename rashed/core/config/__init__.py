"""
Configuration package for Rashed.

This package provides centralized configuration management for all
Rashed components including API, database, Redis, AI provider, uploads
and logging settings.
"""

from .settings import (
    AIConfig,
    APIConfig,
    DatabaseConfig,
    Environment,
    LoggingConfig,
    RashedConfig,
    RedisConfig,
    SecurityConfig,
    UploadConfig,
    get_config,
    get_environment,
    is_development,
    is_production,
    is_testing,
    reload_config,
    set_config,
)

__all__ = [
    # Main configuration classes
    "RashedConfig",
    "Environment",
    # Component configurations
    "AIConfig",
    "APIConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "RedisConfig",
    "SecurityConfig",
    "UploadConfig",
    # Configuration functions
    "get_config",
    "get_environment",
    "is_development",
    "is_production",
    "is_testing",
    "reload_config",
    "set_config",
]
