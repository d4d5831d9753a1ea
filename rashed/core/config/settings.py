"""
Unified configuration management for Rashed.

This module provides a single, environment-aware configuration system that
consolidates all configuration sources into a clean, validated approach.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Supported environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_ALLOWED_EXTENSIONS = [
    # Code files
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".py",
    ".java",
    ".c",
    ".cpp",
    ".cs",
    ".php",
    ".go",
    ".rb",
    ".rs",
    # Data files
    ".json",
    ".csv",
    ".xml",
    ".yaml",
    ".yml",
    # Web files
    ".html",
    ".css",
    ".scss",
    ".sass",
    ".less",
    # Doc files
    ".md",
    ".txt",
    ".pdf",
    # Image files
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".svg",
]


class LoggingConfig(BaseSettings):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level")
    json_output: bool = Field(default=True, description="Output logs in JSON format")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(env_prefix="LOG_")


class DatabaseConfig(BaseSettings):
    """Configuration for the relational store."""

    url_override: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
        description="Full Tortoise connection URL (takes precedence)",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    username: str = Field(default="postgres", description="Database username")
    password: str = Field(default="", description="Database password")
    database: str = Field(default="rashed", description="Database name")
    generate_schemas: bool = Field(
        default=True, description="Create missing tables on startup"
    )

    model_config = SettingsConfigDict(env_prefix="DB_", populate_by_name=True)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate database password is not empty in production."""
        if not v and os.getenv("ENVIRONMENT", "development") == "production":
            if not os.getenv("DB_URL") and not os.getenv("DATABASE_URL"):
                raise ValueError("Database password is required in production")
        return v

    @property
    def url(self) -> str:
        """Get database connection URL in Tortoise format."""
        if self.url_override:
            return self.url_override
        if self.password:
            return (
                f"postgres://{self.username}:{self.password}@"
                f"{self.host}:{self.port}/{self.database}"
            )
        return f"postgres://{self.username}@{self.host}:{self.port}/{self.database}"


class RedisConfig(BaseSettings):
    """Configuration for the Redis session store."""

    host: str = Field(default="127.0.0.1", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    password: Optional[str] = Field(default=None, description="Redis password")
    db: int = Field(default=0, description="Redis database number")
    max_connections: int = Field(default=10, description="Maximum Redis connections")
    socket_timeout: float = Field(default=5.0, description="Redis socket timeout")
    socket_connect_timeout: float = Field(
        default=5.0, description="Redis connection timeout"
    )
    retry_on_timeout: bool = Field(default=True, description="Retry on Redis timeout")

    model_config = SettingsConfigDict(env_prefix="REDIS_")


class SecurityConfig(BaseSettings):
    """Configuration for session cookies and login throttling."""

    session_cookie_name: str = Field(
        default="rashed_session", description="Name of the session cookie"
    )
    session_max_age: int = Field(
        default=7 * 24 * 3600, description="Session lifetime in seconds"
    )
    session_secure: bool = Field(
        default=False, description="Send the session cookie over HTTPS only"
    )
    session_httponly: bool = Field(default=True, description="HTTP-only cookie")
    session_samesite: str = Field(default="lax", description="SameSite policy")
    login_rate_limit_requests: int = Field(
        default=10, description="Login/register attempts allowed per window"
    )
    login_rate_limit_window: int = Field(
        default=60, description="Login rate limit window in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("session_samesite")
    @classmethod
    def validate_samesite(cls, v: str) -> str:
        """Only accept values browsers understand."""
        value = v.lower()
        if value not in ("lax", "strict", "none"):
            raise ValueError("session_samesite must be one of: lax, strict, none")
        return value


class APIConfig(BaseSettings):
    """Configuration for the API server."""

    host: str = Field(default="127.0.0.1", description="API server host")
    port: int = Field(default=5000, description="API server port")
    reload: bool = Field(default=True, description="Enable auto-reload in development")
    cors_origins: List[str] = Field(
        default_factory=list, description="Allowed CORS origins"
    )
    cors_credentials: bool = Field(default=True, description="Allow CORS credentials")
    cors_methods: List[str] = Field(
        default_factory=list, description="Allowed CORS methods"
    )
    cors_headers: List[str] = Field(
        default_factory=list, description="Allowed CORS headers"
    )
    cors_max_age: int = Field(
        default=600, description="CORS preflight cache time in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="API_")

    def cors_origins_resolved(self, environment: str = "development") -> List[str]:
        """Get CORS origins based on environment."""
        if self.cors_origins:
            return self.cors_origins

        if environment in ("development", "testing"):
            return [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5000",
                "http://127.0.0.1:5000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ]
        return []

    def cors_methods_resolved(self, environment: str = "development") -> List[str]:
        """Get CORS methods based on environment."""
        if self.cors_methods:
            return self.cors_methods

        if environment == "production":
            return ["GET", "POST", "PATCH", "OPTIONS"]
        return ["*"]

    @property
    def cors_headers_resolved(self) -> List[str]:
        """Get CORS headers."""
        if self.cors_headers:
            return self.cors_headers

        return [
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "X-Requested-With",
        ]


class AIConfig(BaseSettings):
    """Configuration for the chat-completion provider."""

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "OPENAI_API_KEY", "OPENAI_API_KEY_ENV_VAR", "AI_API_KEY"
        ),
        description="API key for the completion provider",
    )
    model: str = Field(default="gpt-4o", description="Default completion model")
    base_url: Optional[str] = Field(
        default=None, description="Override for OpenAI-compatible endpoints"
    )
    timeout: float = Field(default=60.0, description="Request timeout in seconds")
    chat_temperature: float = Field(
        default=0.7, description="Temperature for assistant chat turns"
    )
    chat_max_tokens: int = Field(
        default=1000, description="Token cap for assistant chat turns"
    )

    model_config = SettingsConfigDict(env_prefix="AI_", populate_by_name=True)


class UploadConfig(BaseSettings):
    """Configuration for file uploads."""

    directory: Path = Field(
        default_factory=lambda: Path.cwd() / "uploads",
        description="Directory where uploaded files are stored",
    )
    max_size: int = Field(
        default=10 * 1024 * 1024, description="Maximum upload size in bytes"
    )
    allowed_extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS),
        description="Lower-case extensions accepted for upload",
    )

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    @field_validator("allowed_extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lower-case extensions and make sure each has a leading dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class RashedConfig(BaseSettings):
    """Main unified configuration class for Rashed."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Current environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    uploads: UploadConfig = Field(default_factory=UploadConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Union[str, Environment]) -> Environment:
        """Validate and convert environment string to enum."""
        if isinstance(v, Environment):
            return v
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid environment: {v}. "
                    f"Must be one of: {[e.value for e in Environment]}"
                )
        raise ValueError(f"Invalid environment type: {type(v)}")

    @field_validator("debug")
    @classmethod
    def validate_debug(cls, v: bool, info: Any) -> bool:
        """Ensure debug is False in production."""
        if v and info.data.get("environment") == Environment.PRODUCTION:
            raise ValueError("Debug mode cannot be enabled in production")
        return v

    def model_post_init(self, __context: Any) -> None:
        """Post-initialization validation."""
        super().model_post_init(__context)
        self._validate_production_cors_config()

    @property
    def cors_origins_resolved(self) -> List[str]:
        """Get resolved CORS origins for this environment."""
        return self.api.cors_origins_resolved(self.environment.value)

    @property
    def cors_methods_resolved(self) -> List[str]:
        """Get resolved CORS methods for this environment."""
        return self.api.cors_methods_resolved(self.environment.value)

    @property
    def cors_headers_resolved(self) -> List[str]:
        """Get resolved CORS headers for this environment."""
        return self.api.cors_headers_resolved

    def _validate_production_cors_config(self) -> None:
        """Validate production CORS configuration security."""
        if self.environment != Environment.PRODUCTION:
            return

        for origin in self.api.cors_origins:
            if origin == "*":
                raise ValueError(
                    "Production environment cannot allow all CORS origins (*). "
                    "Please specify allowed origins explicitly."
                )
            if not origin.startswith("https://"):
                raise ValueError(
                    f"Production CORS origin must use HTTPS: {origin}. "
                    "All production origins must be secure."
                )

        # Cookie sessions must not leak over plain HTTP in production
        if not self.security.session_secure:
            raise ValueError(
                "Production environment requires secure session cookies. "
                "Set SECURITY_SESSION_SECURE=true for production."
            )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


# Global configuration instance
_config: Optional[RashedConfig] = None


def get_config() -> RashedConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = RashedConfig()
    return _config


def set_config(config: RashedConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reload_config() -> RashedConfig:
    """Reload configuration from environment variables."""
    global _config
    _config = RashedConfig()
    return _config


def get_environment() -> Environment:
    """Get the current environment."""
    return get_config().environment


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().is_development()


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().is_production()


def is_testing() -> bool:
    """Check if running in testing environment."""
    return get_config().is_testing()
