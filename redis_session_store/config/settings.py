"""
Session store configuration.

Values come from environment variables and .env files via pydantic-settings.
The shared .env is read first and .env.<environment> second, so the
environment-specific file wins; real environment variables win over both.
ENVIRONMENT selects the file and defaults to development.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redis_session_store.session.codec import DEFAULT_KEY_PREFIX

DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"

_REDIS_URL_SCHEMES = ("redis://", "rediss://", "unix://")
_SECURE_REDIS_URL_SCHEMES = ("rediss://", "unix://")


class Environment(str, Enum):
    """Supported deployment environments."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


ENV_FILES = {env: (".env", f".env.{env.value}") for env in Environment}


def current_environment() -> Environment:
    """Environment named by ENVIRONMENT; unknown or unset means development."""
    value = os.environ.get("ENVIRONMENT", "").strip().lower()
    try:
        return Environment(value)
    except ValueError:
        return Environment.DEVELOPMENT


class Settings(BaseSettings):
    """
    Session store settings loaded from environment variables.

    Only REDIS_URL is required, and only outside development: a
    development process without it connects to a local Redis.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment (development, staging, production)"
    )

    # Redis Configuration
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for session storage"
    )
    redis_socket_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds to wait on a Redis socket before failing the operation"
    )
    session_key_prefix: str = Field(
        default=DEFAULT_KEY_PREFIX,
        description="Namespace prepended to every session id to form its Redis key"
    )

    # Observability Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate that redis_url uses a scheme redis-py understands."""
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not v.startswith(_REDIS_URL_SCHEMES):
            raise ValueError(
                f"redis_url must start with one of: {', '.join(_REDIS_URL_SCHEMES)}"
            )
        return v

    @field_validator("session_key_prefix")
    @classmethod
    def validate_session_key_prefix(cls, v: str) -> str:
        """Validate that the key prefix is not empty."""
        if not v or not v.strip():
            raise ValueError("session_key_prefix cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.strip().upper()
        if v not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(valid_levels))}")
        return v

    @model_validator(mode="after")
    def validate_redis_config(self) -> "Settings":
        """Require an explicit redis_url outside development."""
        if not self.redis_url and self.environment != Environment.DEVELOPMENT:
            raise ValueError(
                "redis_url is required in non-development environments"
            )
        return self

    @property
    def effective_redis_url(self) -> str:
        """The configured Redis URL, or the local default in development."""
        return self.redis_url or DEFAULT_REDIS_URL


class ConfigurationError(Exception):
    """
    Settings could not be loaded or are unfit for startup.

    Attributes:
        problems: Field name to reason, one entry per rejected setting
    """

    def __init__(self, message: str, problems: Optional[dict[str, str]] = None):
        self.message = message
        self.problems = problems or {}
        lines = [message] + [f"  - {field}: {reason}" for field, reason in self.problems.items()]
        super().__init__("\n".join(lines))


def load_settings(environment: Optional[Environment] = None) -> Settings:
    """
    Load and validate settings.

    Args:
        environment: Overrides ENVIRONMENT when given.

    Raises:
        ConfigurationError: If a setting is missing or invalid.
    """
    if environment is None:
        environment = current_environment()

    env_files = tuple(path for path in ENV_FILES[environment] if Path(path).is_file())

    try:
        return Settings(_env_file=env_files or None, environment=environment)
    except ValidationError as e:
        problems = {
            ".".join(str(loc) for loc in error["loc"]) or "settings": error["msg"]
            for error in e.errors(include_url=False)
        }
        raise ConfigurationError(
            f"Invalid configuration for environment '{environment.value}'",
            problems,
        ) from e


# Global settings cache
_settings_cache: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Settings for this process, loaded on first use.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    global _settings_cache

    if _settings_cache is None:
        _settings_cache = load_settings()

    return _settings_cache


def clear_settings_cache() -> None:
    """Forget the loaded settings so the next get_settings() reloads them."""
    global _settings_cache
    _settings_cache = None


def validate_startup() -> None:
    """
    Validate settings before the store is put into service.

    Production deployments must reach Redis over TLS (rediss://) or a
    local unix socket.

    Raises:
        ConfigurationError: If any required settings are missing or invalid.
    """
    settings = get_settings()

    if (settings.environment == Environment.PRODUCTION
            and not settings.effective_redis_url.startswith(_SECURE_REDIS_URL_SCHEMES)):
        raise ConfigurationError(
            "Configuration is not fit for production",
            {"redis_url": "must use TLS (rediss://) or a unix socket (unix://)"},
        )
